import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models.registry_assessment import RegistryAssessment
from models.schemas import RegistryAssessmentCreate
from services.risk_registry import get_risk_registry_by_id
from services.scoring import classify_risk_level, risk_change
from services.translate import translate_direction

logger = logging.getLogger(__name__)


def create_registry_assessment(db: Session, data: RegistryAssessmentCreate) -> RegistryAssessment:
    # the referenced registry entry is deliberately not looked up here
    assessment = RegistryAssessment(**data.model_dump())
    db.add(assessment)
    db.commit()
    db.refresh(assessment)
    logger.info(
        "Saved registry assessment %s for risk %s (level %s)",
        assessment.id, assessment.risk_registry_id, assessment.risk_level,
    )
    return assessment


def get_registry_assessment_by_id(db: Session, assessment_id: int) -> Optional[RegistryAssessment]:
    return db.query(RegistryAssessment).filter(RegistryAssessment.id == assessment_id).first()


def get_all_registry_assessments(db: Session) -> List[RegistryAssessment]:
    return db.query(RegistryAssessment).order_by(RegistryAssessment.id).all()


def get_registry_assessments_by_risk_id(db: Session, risk_id: int) -> List[RegistryAssessment]:
    return (
        db.query(RegistryAssessment)
        .filter(RegistryAssessment.risk_registry_id == risk_id)
        .order_by(RegistryAssessment.id)
        .all()
    )


def compare_with_prior(db: Session, assessment: RegistryAssessment, lang: str = "en") -> dict:
    """Current level of an assessment against the registry's prior-year level.

    The prior score is the responsible-unit level carried on the registry
    entry. A registry entry that no longer exists counts as no prior score.
    """
    entry = get_risk_registry_by_id(db, assessment.risk_registry_id)
    prior = entry.responsible_risk_level if entry else None
    change = risk_change(assessment.risk_level, prior)

    return {
        "assessment_id": assessment.id,
        "risk_registry_id": assessment.risk_registry_id,
        "current_risk_level": assessment.risk_level,
        "current_band": classify_risk_level(assessment.risk_level),
        "prior_risk_level": prior,
        "prior_band": classify_risk_level(prior),
        "delta": change.delta,
        "direction": change.direction,
        "direction_label": translate_direction(change.direction, lang),
        "has_prior": change.has_prior,
    }
