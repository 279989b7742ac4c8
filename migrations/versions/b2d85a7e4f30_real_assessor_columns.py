"""real assessor identity on registry assessments

Revision ID: b2d85a7e4f30
Revises: 9e0b6f3c1a47
Create Date: 2025-02-03 11:20:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "b2d85a7e4f30"
down_revision = "9e0b6f3c1a47"
branch_labels = None
depends_on = None

COLUMNS = [
    ("real_assessor_email", "assessor_email"),
    ("real_assessor_name", "assessor_name"),
    ("real_assessor_department", "assessor_department"),
]


def upgrade():
    existing = {c["name"] for c in inspect(op.get_bind()).get_columns("registry_assessments")}

    missing = [column for column, _ in COLUMNS if column not in existing]
    if missing:
        with op.batch_alter_table("registry_assessments", schema=None) as batch_op:
            for column in missing:
                batch_op.add_column(sa.Column(column, sa.String(), nullable=True))

    # rows written before the split: the recorded assessor is the real one
    for column, source in COLUMNS:
        if column not in missing:
            continue
        op.execute(f"UPDATE registry_assessments SET {column} = {source} WHERE {column} IS NULL")


def downgrade():
    with op.batch_alter_table("registry_assessments", schema=None) as batch_op:
        for column, _ in reversed(COLUMNS):
            batch_op.drop_column(column)
