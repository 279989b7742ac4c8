"""objective / sub-objective / category mappings

Revision ID: 9e0b6f3c1a47
Revises: 7c4e2d8a5b12
Create Date: 2025-01-20 14:05:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "9e0b6f3c1a47"
down_revision = "7c4e2d8a5b12"
branch_labels = None
depends_on = None


def upgrade():
    if "strategic_risk_mappings" in inspect(op.get_bind()).get_table_names():
        return

    op.create_table(
        "strategic_risk_mappings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("strategic_objective_id", sa.Integer(), sa.ForeignKey("strategic_objectives.id"), nullable=False),
        sa.Column("sub_strategic_objective_id", sa.Integer(), sa.ForeignKey("sub_strategic_objectives.id"), nullable=False),
        sa.Column("risk_category_id", sa.Integer(), sa.ForeignKey("risk_categories.id"), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_strategic_risk_mappings_year", "strategic_risk_mappings", ["year"])


def downgrade():
    op.drop_table("strategic_risk_mappings")
