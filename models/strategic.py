from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from db import Base


class StrategicObjective(Base):
    __tablename__ = "strategic_objectives"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    leader = Column(String, nullable=False)
    year = Column(Integer, nullable=False, index=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    sub_objectives = relationship("SubStrategicObjective", back_populates="strategic_objective")


class SubStrategicObjective(Base):
    __tablename__ = "sub_strategic_objectives"

    id = Column(Integer, primary_key=True, index=True)
    strategic_objective_id = Column(Integer, ForeignKey("strategic_objectives.id"), nullable=False)
    name = Column(Text, nullable=False)
    year = Column(Integer, nullable=False, index=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    strategic_objective = relationship("StrategicObjective", back_populates="sub_objectives")


class RiskCategory(Base):
    __tablename__ = "risk_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    year = Column(Integer, nullable=False, index=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class StrategicRiskMapping(Base):
    __tablename__ = "strategic_risk_mappings"

    id = Column(Integer, primary_key=True, index=True)
    strategic_objective_id = Column(Integer, ForeignKey("strategic_objectives.id"), nullable=False)
    sub_strategic_objective_id = Column(Integer, ForeignKey("sub_strategic_objectives.id"), nullable=False)
    risk_category_id = Column(Integer, ForeignKey("risk_categories.id"), nullable=False)
    year = Column(Integer, nullable=False, index=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    strategic_objective = relationship("StrategicObjective")
    sub_strategic_objective = relationship("SubStrategicObjective")
    risk_category = relationship("RiskCategory")

    @property
    def strategic_objective_name(self):
        return self.strategic_objective.name if self.strategic_objective else None

    @property
    def sub_strategic_objective_name(self):
        return self.sub_strategic_objective.name if self.sub_strategic_objective else None

    @property
    def risk_category_name(self):
        return self.risk_category.name if self.risk_category else None
