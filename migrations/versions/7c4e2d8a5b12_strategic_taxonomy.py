"""strategic objectives, sub-objectives and risk categories

Revision ID: 7c4e2d8a5b12
Revises: 3a1f0c2b9d01
Create Date: 2025-01-13 09:30:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "7c4e2d8a5b12"
down_revision = "3a1f0c2b9d01"
branch_labels = None
depends_on = None


def _year_columns():
    return [
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    ]


def upgrade():
    tables = set(inspect(op.get_bind()).get_table_names())

    if "strategic_objectives" not in tables:
        op.create_table(
            "strategic_objectives",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("leader", sa.String(), nullable=False),
            *_year_columns(),
        )
        op.create_index("ix_strategic_objectives_year", "strategic_objectives", ["year"])

    if "sub_strategic_objectives" not in tables:
        op.create_table(
            "sub_strategic_objectives",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column(
                "strategic_objective_id",
                sa.Integer(),
                sa.ForeignKey("strategic_objectives.id"),
                nullable=False,
            ),
            sa.Column("name", sa.Text(), nullable=False),
            *_year_columns(),
        )
        op.create_index("ix_sub_strategic_objectives_year", "sub_strategic_objectives", ["year"])

    if "risk_categories" not in tables:
        op.create_table(
            "risk_categories",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            *_year_columns(),
        )
        op.create_index("ix_risk_categories_year", "risk_categories", ["year"])


def downgrade():
    op.drop_table("risk_categories")
    op.drop_table("sub_strategic_objectives")
    op.drop_table("strategic_objectives")
