from sqlalchemy import Column, Integer, String, Boolean, DateTime
from datetime import datetime
from db import Base

# questionnaire items, grouped the way the paper form groups them
QUESTIONNAIRE_ITEMS = {
    "strategic": ["competition", "market_demand"],
    "operational": ["raw_material", "material_shortage", "new_product_development"],
    "financial": ["credit", "currency", "funding_cost"],
    "emerging": [
        "geopolitical_conflict",
        "technology_cold_war",
        "ai_transformation",
        "carbon_pricing",
    ],
}


class RiskAssessment(Base):
    __tablename__ = "risk_assessments"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False)
    name = Column(String, nullable=False)
    department = Column(String, nullable=False)
    acknowledgement = Column(Boolean, nullable=False, default=False)

    # Strategic
    competition_impact = Column(Integer)
    competition_likelihood = Column(Integer)
    market_demand_impact = Column(Integer)
    market_demand_likelihood = Column(Integer)

    # Operational
    raw_material_impact = Column(Integer)
    raw_material_likelihood = Column(Integer)
    material_shortage_impact = Column(Integer)
    material_shortage_likelihood = Column(Integer)
    new_product_development_impact = Column(Integer)
    new_product_development_likelihood = Column(Integer)

    # Financial
    credit_impact = Column(Integer)
    credit_likelihood = Column(Integer)
    currency_impact = Column(Integer)
    currency_likelihood = Column(Integer)
    funding_cost_impact = Column(Integer)
    funding_cost_likelihood = Column(Integer)

    # Emerging
    geopolitical_conflict_impact = Column(Integer)
    geopolitical_conflict_likelihood = Column(Integer)
    technology_cold_war_impact = Column(Integer)
    technology_cold_war_likelihood = Column(Integer)
    ai_transformation_impact = Column(Integer)
    ai_transformation_likelihood = Column(Integer)
    carbon_pricing_impact = Column(Integer)
    carbon_pricing_likelihood = Column(Integer)

    submitted_at = Column(DateTime, default=datetime.utcnow)
