import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from dependencies.year import get_year
from models.schemas import (
    StrategicObjectiveCreate,
    StrategicObjectiveOut,
    SubStrategicObjectiveCreate,
    SubStrategicObjectiveOut,
    RiskCategoryCreate,
    RiskCategoryOut,
    StrategicMappingCreate,
    StrategicMappingOut,
)
from models.strategic import StrategicObjective, SubStrategicObjective, RiskCategory, StrategicRiskMapping
from routes.responses import internal_error
from services import strategic

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["strategic"])


def _deactivate(db: Session, model, item_id: int, label: str):
    try:
        removed = strategic.deactivate(db, model, item_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deactivating %s %s", model.__tablename__, item_id)
        return internal_error()

    if not removed:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return {"message": f"{label} deleted successfully"}


# strategic objectives

@router.get("/strategic-objectives", response_model=List[StrategicObjectiveOut])
def list_objectives(year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        return strategic.get_strategic_objectives(db, year)
    except SQLAlchemyError:
        logger.exception("Error fetching strategic objectives for %s", year)
        return internal_error()


@router.post("/strategic-objectives", response_model=StrategicObjectiveOut)
def create_objective(data: StrategicObjectiveCreate, year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        objective = strategic.create_strategic_objective(db, data, year)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating strategic objective")
        return internal_error()

    logger.info("Created strategic objective %s for %s", objective.id, objective.year)
    return objective


@router.delete("/strategic-objectives/{objective_id}")
def delete_objective(objective_id: int, db: Session = Depends(get_db)):
    return _deactivate(db, StrategicObjective, objective_id, "Strategic objective")


# sub-objectives

@router.get("/sub-strategic-objectives/{objective_id}", response_model=List[SubStrategicObjectiveOut])
def list_sub_objectives(objective_id: int, year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        return strategic.get_sub_strategic_objectives(db, objective_id, year)
    except SQLAlchemyError:
        logger.exception("Error fetching sub-objectives of %s", objective_id)
        return internal_error()


@router.post("/sub-strategic-objectives/{objective_id}", response_model=SubStrategicObjectiveOut)
def create_sub_objective(
    objective_id: int,
    data: SubStrategicObjectiveCreate,
    year: int = Depends(get_year),
    db: Session = Depends(get_db),
):
    try:
        if not strategic.get_strategic_objective(db, objective_id):
            raise HTTPException(status_code=404, detail="Strategic objective not found")
        sub = strategic.create_sub_strategic_objective(db, objective_id, data, year)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating sub-objective under %s", objective_id)
        return internal_error()

    logger.info("Created sub-objective %s under %s", sub.id, objective_id)
    return sub


@router.delete("/sub-strategic-objectives/item/{sub_id}")
def delete_sub_objective(sub_id: int, db: Session = Depends(get_db)):
    return _deactivate(db, SubStrategicObjective, sub_id, "Sub-strategic objective")


# risk categories

@router.get("/risk-categories", response_model=List[RiskCategoryOut])
def list_categories(year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        return strategic.get_risk_categories(db, year)
    except SQLAlchemyError:
        logger.exception("Error fetching risk categories for %s", year)
        return internal_error()


@router.post("/risk-categories", response_model=RiskCategoryOut)
def create_category(data: RiskCategoryCreate, year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        category = strategic.create_risk_category(db, data, year)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating risk category")
        return internal_error()

    logger.info("Created risk category %s for %s", category.id, category.year)
    return category


@router.delete("/risk-categories/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db)):
    return _deactivate(db, RiskCategory, category_id, "Risk category")


# mappings

@router.get("/strategic-mappings", response_model=List[StrategicMappingOut])
def list_mappings(year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        return strategic.get_strategic_mappings(db, year)
    except SQLAlchemyError:
        logger.exception("Error fetching strategic mappings for %s", year)
        return internal_error()


@router.get("/strategic-mappings/{objective_id}/{sub_id}", response_model=List[StrategicMappingOut])
def list_mappings_for(objective_id: int, sub_id: int, year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        return strategic.get_strategic_mappings_for(db, objective_id, sub_id, year)
    except SQLAlchemyError:
        logger.exception("Error fetching mappings for %s/%s", objective_id, sub_id)
        return internal_error()


@router.post("/strategic-mappings", response_model=StrategicMappingOut)
def create_mapping(data: StrategicMappingCreate, year: int = Depends(get_year), db: Session = Depends(get_db)):
    try:
        if not strategic.get_strategic_objective(db, data.strategic_objective_id):
            raise HTTPException(status_code=404, detail="Strategic objective not found")
        if not strategic.get_sub_strategic_objective(db, data.sub_strategic_objective_id):
            raise HTTPException(status_code=404, detail="Sub-strategic objective not found")
        if not strategic.get_risk_category(db, data.risk_category_id):
            raise HTTPException(status_code=404, detail="Risk category not found")
        mapping = strategic.create_strategic_mapping(db, data, year)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating strategic mapping")
        return internal_error()

    logger.info("Created strategic mapping %s", mapping.id)
    return mapping


@router.delete("/strategic-mappings/item/{mapping_id}")
def delete_mapping(mapping_id: int, db: Session = Depends(get_db)):
    return _deactivate(db, StrategicRiskMapping, mapping_id, "Strategic mapping")
