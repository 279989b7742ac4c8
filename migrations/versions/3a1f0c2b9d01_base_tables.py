"""users, questionnaire, risk registry and registry assessments

Revision ID: 3a1f0c2b9d01
Revises:
Create Date: 2025-01-06 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "3a1f0c2b9d01"
down_revision = None
branch_labels = None
depends_on = None

QUESTIONNAIRE_ITEMS = [
    "competition",
    "market_demand",
    "raw_material",
    "material_shortage",
    "new_product_development",
    "credit",
    "currency",
    "funding_cost",
    "geopolitical_conflict",
    "technology_cold_war",
    "ai_transformation",
    "carbon_pricing",
]


def upgrade():
    tables = set(inspect(op.get_bind()).get_table_names())

    if "users" not in tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("username", sa.String(), nullable=False, unique=True),
            sa.Column("email", sa.String(), nullable=False, unique=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_users_id", "users", ["id"])

    if "risk_assessments" not in tables:
        score_columns = []
        for item in QUESTIONNAIRE_ITEMS:
            score_columns.append(sa.Column(f"{item}_impact", sa.Integer(), nullable=True))
            score_columns.append(sa.Column(f"{item}_likelihood", sa.Integer(), nullable=True))

        op.create_table(
            "risk_assessments",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("department", sa.String(), nullable=False),
            sa.Column("acknowledgement", sa.Boolean(), nullable=False),
            *score_columns,
            sa.Column("submitted_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_risk_assessments_id", "risk_assessments", ["id"])

    if "risk_registry" not in tables:
        op.create_table(
            "risk_registry",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("strategic_objective", sa.Text(), nullable=False),
            sa.Column("sub_objective", sa.Text(), nullable=False),
            sa.Column("responsible_department", sa.String(), nullable=False),
            sa.Column("risk_owner", sa.String(), nullable=False),
            sa.Column("operational_target", sa.Text(), nullable=False),
            sa.Column("seed_member", sa.String(), nullable=False),
            sa.Column("risk_category", sa.String(), nullable=False),
            sa.Column("level1_index", sa.String(), nullable=False),
            sa.Column("risk_event_source", sa.Text(), nullable=False),
            sa.Column("level2_index", sa.String(), nullable=False),
            sa.Column("risk_scenario", sa.Text(), nullable=False),
            sa.Column("existing_measures", sa.Text(), nullable=False),
            sa.Column("warning_indicator", sa.Text(), nullable=True),
            sa.Column("action_indicator", sa.Text(), nullable=True),
            sa.Column("stakeholders", sa.Text(), nullable=True),
            sa.Column("unit_possibility", sa.Integer(), nullable=True),
            sa.Column("unit_impact", sa.Integer(), nullable=True),
            sa.Column("unit_risk_level", sa.Integer(), nullable=True),
            sa.Column("responsible_possibility", sa.Integer(), nullable=True),
            sa.Column("responsible_impact", sa.Integer(), nullable=True),
            sa.Column("responsible_risk_level", sa.Integer(), nullable=True),
            sa.Column("response_strategy", sa.String(), nullable=True),
            sa.Column("new_risk_measures", sa.Text(), nullable=True),
            sa.Column("responsible_unit", sa.String(), nullable=True),
            sa.Column("new_warning_indicator", sa.Text(), nullable=True),
            sa.Column("new_action_indicator", sa.Text(), nullable=True),
            sa.Column("optimization_suggestion", sa.Text(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("weighted_risk_level", sa.Numeric(10, 2), nullable=True),
            sa.Column("assessment_optimization", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_risk_registry_id", "risk_registry", ["id"])

    if "registry_assessments" not in tables:
        op.create_table(
            "registry_assessments",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("risk_registry_id", sa.Integer(), nullable=False),
            sa.Column("assessor_email", sa.String(), nullable=False),
            sa.Column("assessor_name", sa.String(), nullable=False),
            sa.Column("assessor_department", sa.String(), nullable=False),
            sa.Column("current_impact", sa.Integer(), nullable=False),
            sa.Column("current_likelihood", sa.Integer(), nullable=False),
            sa.Column("risk_level", sa.Integer(), nullable=False),
            sa.Column("target_impact", sa.Integer(), nullable=True),
            sa.Column("target_likelihood", sa.Integer(), nullable=True),
            sa.Column("target_risk_level", sa.Integer(), nullable=True),
            sa.Column("assessment_notes", sa.Text(), nullable=True),
            sa.Column("mitigation_actions", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_registry_assessments_id", "registry_assessments", ["id"])
        op.create_index("ix_registry_assessments_risk_registry_id", "registry_assessments", ["risk_registry_id"])


def downgrade():
    op.drop_table("registry_assessments")
    op.drop_table("risk_registry")
    op.drop_table("risk_assessments")
    op.drop_table("users")
