import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from models.schemas import RiskAssessmentCreate, RiskAssessmentOut
from routes.responses import internal_error
from services.risk_assessment import create_risk_assessment, get_risk_assessment_by_id, get_all_risk_assessments

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/risk-assessments", tags=["risk-assessments"])


@router.post("", response_model=RiskAssessmentOut)
def submit_questionnaire(data: RiskAssessmentCreate, db: Session = Depends(get_db)):
    try:
        return create_risk_assessment(db, data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving risk assessment questionnaire")
        return internal_error()


@router.get("", response_model=List[RiskAssessmentOut])
def list_questionnaires(db: Session = Depends(get_db)):
    try:
        return get_all_risk_assessments(db)
    except SQLAlchemyError:
        logger.exception("Error fetching risk assessment questionnaires")
        return internal_error()


@router.get("/{assessment_id}", response_model=RiskAssessmentOut)
def get_questionnaire(assessment_id: int, db: Session = Depends(get_db)):
    try:
        assessment = get_risk_assessment_by_id(db, assessment_id)
    except SQLAlchemyError:
        logger.exception("Error fetching risk assessment %s", assessment_id)
        return internal_error()

    if not assessment:
        raise HTTPException(status_code=404, detail="Risk assessment not found")
    return assessment
