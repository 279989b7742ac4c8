from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime
from datetime import datetime

from db import Base


class RiskRegistryEntry(Base):
    __tablename__ = "risk_registry"

    id = Column(Integer, primary_key=True, index=True)

    # Strategic information
    strategic_objective = Column(Text, nullable=False)
    sub_objective = Column(Text, nullable=False)
    responsible_department = Column(String, nullable=False)
    risk_owner = Column(String, nullable=False)
    operational_target = Column(Text, nullable=False)
    seed_member = Column(String, nullable=False)

    # Classification
    risk_category = Column(String, nullable=False)
    level1_index = Column(String, nullable=False)
    risk_event_source = Column(Text, nullable=False)
    level2_index = Column(String, nullable=False)
    risk_scenario = Column(Text, nullable=False)

    # Current controls
    existing_measures = Column(Text, nullable=False)
    warning_indicator = Column(Text, nullable=True)
    action_indicator = Column(Text, nullable=True)
    stakeholders = Column(Text, nullable=True)

    # Prior-year scoring, unit level
    unit_possibility = Column(Integer, nullable=True)
    unit_impact = Column(Integer, nullable=True)
    unit_risk_level = Column(Integer, nullable=True)

    # Prior-year scoring, responsible unit level
    responsible_possibility = Column(Integer, nullable=True)
    responsible_impact = Column(Integer, nullable=True)
    responsible_risk_level = Column(Integer, nullable=True)

    # Response
    response_strategy = Column(String, nullable=True)  # 降低/移轉/接受/拒絕
    new_risk_measures = Column(Text, nullable=True)
    responsible_unit = Column(String, nullable=True)
    new_warning_indicator = Column(Text, nullable=True)
    new_action_indicator = Column(Text, nullable=True)

    optimization_suggestion = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    weighted_risk_level = Column(Numeric(10, 2), nullable=True)
    assessment_optimization = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
