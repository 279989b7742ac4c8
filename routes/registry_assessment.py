import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from dependencies.lang import get_lang
from models.schemas import RegistryAssessmentCreate, RegistryAssessmentOut, RiskComparisonOut
from routes.responses import internal_error
from services.registry_assessment import (
    create_registry_assessment,
    get_registry_assessment_by_id,
    get_all_registry_assessments,
    get_registry_assessments_by_risk_id,
    compare_with_prior,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/registry-assessments", tags=["registry-assessments"])


@router.post("", response_model=RegistryAssessmentOut)
def submit_assessment(data: RegistryAssessmentCreate, db: Session = Depends(get_db)):
    try:
        return create_registry_assessment(db, data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving registry assessment for risk %s", data.risk_registry_id)
        return internal_error()


@router.get("", response_model=List[RegistryAssessmentOut])
def list_assessments(db: Session = Depends(get_db)):
    try:
        return get_all_registry_assessments(db)
    except SQLAlchemyError:
        logger.exception("Error fetching registry assessments")
        return internal_error()


@router.get("/risk/{risk_id}", response_model=List[RegistryAssessmentOut])
def list_assessments_for_risk(risk_id: int, db: Session = Depends(get_db)):
    try:
        return get_registry_assessments_by_risk_id(db, risk_id)
    except SQLAlchemyError:
        logger.exception("Error fetching assessments for risk %s", risk_id)
        return internal_error()


@router.get("/{assessment_id}", response_model=RegistryAssessmentOut)
def get_assessment(assessment_id: int, db: Session = Depends(get_db)):
    try:
        assessment = get_registry_assessment_by_id(db, assessment_id)
    except SQLAlchemyError:
        logger.exception("Error fetching registry assessment %s", assessment_id)
        return internal_error()

    if not assessment:
        raise HTTPException(status_code=404, detail="Registry assessment not found")
    return assessment


@router.get("/{assessment_id}/comparison", response_model=RiskComparisonOut)
def get_comparison(assessment_id: int, db: Session = Depends(get_db), lang: str = Depends(get_lang)):
    try:
        assessment = get_registry_assessment_by_id(db, assessment_id)
        if not assessment:
            raise HTTPException(status_code=404, detail="Registry assessment not found")
        return compare_with_prior(db, assessment, lang)
    except SQLAlchemyError:
        logger.exception("Error comparing registry assessment %s", assessment_id)
        return internal_error()
