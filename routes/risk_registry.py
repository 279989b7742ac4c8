import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from models.schemas import RiskRegistryCreate, RiskRegistryUpdate, RiskRegistryOut
from routes.responses import internal_error, validation_error
from services.risk_registry import (
    create_risk_registry,
    get_risk_registry_by_id,
    get_all_risk_registry,
    update_risk_registry,
    delete_risk_registry,
    RiskLevelMismatch,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/risk-registry", tags=["risk-registry"])


@router.post("", response_model=RiskRegistryOut)
def create_entry(data: RiskRegistryCreate, db: Session = Depends(get_db)):
    try:
        return create_risk_registry(db, data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating risk registry entry")
        return internal_error()


@router.get("", response_model=List[RiskRegistryOut])
def list_entries(db: Session = Depends(get_db)):
    try:
        return get_all_risk_registry(db)
    except SQLAlchemyError:
        logger.exception("Error fetching risk registry")
        return internal_error()


@router.get("/{registry_id}", response_model=RiskRegistryOut)
def get_entry(registry_id: int, db: Session = Depends(get_db)):
    try:
        entry = get_risk_registry_by_id(db, registry_id)
    except SQLAlchemyError:
        logger.exception("Error fetching risk registry entry %s", registry_id)
        return internal_error()

    if not entry:
        raise HTTPException(status_code=404, detail="Risk registry entry not found")
    return entry


@router.put("/{registry_id}", response_model=RiskRegistryOut)
def update_entry(registry_id: int, data: RiskRegistryUpdate, db: Session = Depends(get_db)):
    try:
        entry = update_risk_registry(db, registry_id, data)
    except RiskLevelMismatch as exc:
        return validation_error([{"loc": ("body", exc.field), "msg": str(exc), "type": "value_error"}])
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating risk registry entry %s", registry_id)
        return internal_error()

    if not entry:
        raise HTTPException(status_code=404, detail="Risk registry entry not found")
    return entry


@router.delete("/{registry_id}")
def delete_entry(registry_id: int, db: Session = Depends(get_db)):
    try:
        deleted = delete_risk_registry(db, registry_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting risk registry entry %s", registry_id)
        return internal_error()

    if not deleted:
        raise HTTPException(status_code=404, detail="Risk registry entry not found")
    return {"message": "Risk registry entry deleted successfully"}
