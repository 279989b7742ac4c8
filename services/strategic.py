import logging
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session, joinedload

from config.settings import APP_TIMEZONE
from models.schemas import (
    StrategicObjectiveCreate,
    SubStrategicObjectiveCreate,
    RiskCategoryCreate,
    StrategicMappingCreate,
)
from models.strategic import StrategicObjective, SubStrategicObjective, RiskCategory, StrategicRiskMapping

logger = logging.getLogger(__name__)


def current_year() -> int:
    return datetime.now(pytz.timezone(APP_TIMEZONE)).year


def _get_active(db: Session, model, item_id: int):
    return db.query(model).filter(model.id == item_id, model.is_active == True).first()


def deactivate(db: Session, model, item_id: int) -> bool:
    """Soft-delete a reference row; returns ``False`` if it is missing or already inactive."""
    item = _get_active(db, model, item_id)
    if not item:
        return False

    item.is_active = False
    if hasattr(item, "updated_at"):
        item.updated_at = datetime.utcnow()
    db.commit()
    logger.info("Deactivated %s %s", model.__tablename__, item_id)
    return True


# strategic objectives

def get_strategic_objectives(db: Session, year: int) -> List[StrategicObjective]:
    return (
        db.query(StrategicObjective)
        .filter(StrategicObjective.year == year, StrategicObjective.is_active == True)
        .order_by(StrategicObjective.id)
        .all()
    )


def get_strategic_objective(db: Session, objective_id: int) -> Optional[StrategicObjective]:
    return _get_active(db, StrategicObjective, objective_id)


def create_strategic_objective(db: Session, data: StrategicObjectiveCreate, year: int) -> StrategicObjective:
    objective = StrategicObjective(name=data.name, leader=data.leader, year=data.year or year)
    db.add(objective)
    db.commit()
    db.refresh(objective)
    return objective


# sub-objectives

def get_sub_strategic_objectives(db: Session, objective_id: int, year: int) -> List[SubStrategicObjective]:
    return (
        db.query(SubStrategicObjective)
        .filter(
            SubStrategicObjective.strategic_objective_id == objective_id,
            SubStrategicObjective.year == year,
            SubStrategicObjective.is_active == True,
        )
        .order_by(SubStrategicObjective.id)
        .all()
    )


def get_sub_strategic_objective(db: Session, sub_id: int) -> Optional[SubStrategicObjective]:
    return _get_active(db, SubStrategicObjective, sub_id)


def create_sub_strategic_objective(
    db: Session, objective_id: int, data: SubStrategicObjectiveCreate, year: int
) -> SubStrategicObjective:
    sub = SubStrategicObjective(strategic_objective_id=objective_id, name=data.name, year=data.year or year)
    db.add(sub)
    db.commit()
    db.refresh(sub)
    return sub


# risk categories

def get_risk_categories(db: Session, year: int) -> List[RiskCategory]:
    return (
        db.query(RiskCategory)
        .filter(RiskCategory.year == year, RiskCategory.is_active == True)
        .order_by(RiskCategory.id)
        .all()
    )


def get_risk_category(db: Session, category_id: int) -> Optional[RiskCategory]:
    return _get_active(db, RiskCategory, category_id)


def create_risk_category(db: Session, data: RiskCategoryCreate, year: int) -> RiskCategory:
    category = RiskCategory(name=data.name, description=data.description, year=data.year or year)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


# objective -> sub-objective -> category mappings

def _mapping_query(db: Session, year: int):
    return (
        db.query(StrategicRiskMapping)
        .options(
            joinedload(StrategicRiskMapping.strategic_objective),
            joinedload(StrategicRiskMapping.sub_strategic_objective),
            joinedload(StrategicRiskMapping.risk_category),
        )
        .filter(StrategicRiskMapping.year == year, StrategicRiskMapping.is_active == True)
    )


def get_strategic_mappings(db: Session, year: int) -> List[StrategicRiskMapping]:
    return _mapping_query(db, year).order_by(StrategicRiskMapping.id).all()


def get_strategic_mappings_for(db: Session, objective_id: int, sub_id: int, year: int) -> List[StrategicRiskMapping]:
    return (
        _mapping_query(db, year)
        .filter(
            StrategicRiskMapping.strategic_objective_id == objective_id,
            StrategicRiskMapping.sub_strategic_objective_id == sub_id,
        )
        .order_by(StrategicRiskMapping.id)
        .all()
    )


def create_strategic_mapping(db: Session, data: StrategicMappingCreate, year: int) -> StrategicRiskMapping:
    mapping = StrategicRiskMapping(
        strategic_objective_id=data.strategic_objective_id,
        sub_strategic_objective_id=data.sub_strategic_objective_id,
        risk_category_id=data.risk_category_id,
        year=data.year or year,
    )
    db.add(mapping)
    db.commit()
    db.refresh(mapping)
    return mapping
