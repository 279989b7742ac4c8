from sqlalchemy import Column, Integer, String, Text, DateTime
from datetime import datetime

from db import Base


class RegistryAssessment(Base):
    __tablename__ = "registry_assessments"

    id = Column(Integer, primary_key=True, index=True)
    # not a foreign key: assessments outlive deleted registry rows
    risk_registry_id = Column(Integer, nullable=False, index=True)

    assessor_email = Column(String, nullable=False)
    assessor_name = Column(String, nullable=False)
    assessor_department = Column(String, nullable=False)

    real_assessor_email = Column(String, nullable=True)
    real_assessor_name = Column(String, nullable=True)
    real_assessor_department = Column(String, nullable=True)

    current_impact = Column(Integer, nullable=False)
    current_likelihood = Column(Integer, nullable=False)
    risk_level = Column(Integer, nullable=False)

    target_impact = Column(Integer, nullable=True)
    target_likelihood = Column(Integer, nullable=True)
    target_risk_level = Column(Integer, nullable=True)

    assessment_notes = Column(Text, nullable=True)
    mitigation_actions = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
