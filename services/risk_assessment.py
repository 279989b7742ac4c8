import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models.risk_assessment import RiskAssessment
from models.schemas import RiskAssessmentCreate

logger = logging.getLogger(__name__)


def create_risk_assessment(db: Session, data: RiskAssessmentCreate) -> RiskAssessment:
    assessment = RiskAssessment(**data.model_dump())
    db.add(assessment)
    db.commit()
    db.refresh(assessment)
    logger.info("Saved questionnaire %s from %s", assessment.id, assessment.department)
    return assessment


def get_risk_assessment_by_id(db: Session, assessment_id: int) -> Optional[RiskAssessment]:
    return db.query(RiskAssessment).filter(RiskAssessment.id == assessment_id).first()


def get_all_risk_assessments(db: Session) -> List[RiskAssessment]:
    return db.query(RiskAssessment).order_by(RiskAssessment.id).all()
