import logging
from datetime import datetime
from typing import List, Optional

from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from models.risk_registry import RiskRegistryEntry
from models.schemas import RiskRegistryCreate, RiskRegistryUpdate
from services.scoring import calculate_risk_level

logger = logging.getLogger(__name__)


class RiskLevelMismatch(ValueError):
    def __init__(self, level_field: str, expected: int, got: int):
        self.field = to_camel(level_field)
        super().__init__(f"{self.field} must equal impact x possibility ({expected}), got {got}")


# (impact, possibility, level) column triples scored on each entry
LEVEL_COLUMNS = [
    ("unit_impact", "unit_possibility", "unit_risk_level"),
    ("responsible_impact", "responsible_possibility", "responsible_risk_level"),
]


def create_risk_registry(db: Session, data: RiskRegistryCreate) -> RiskRegistryEntry:
    entry = RiskRegistryEntry(**data.model_dump())
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Created risk registry entry %s", entry.id)
    return entry


def get_risk_registry_by_id(db: Session, registry_id: int) -> Optional[RiskRegistryEntry]:
    return db.query(RiskRegistryEntry).filter(RiskRegistryEntry.id == registry_id).first()


def get_all_risk_registry(db: Session) -> List[RiskRegistryEntry]:
    return db.query(RiskRegistryEntry).order_by(RiskRegistryEntry.id).all()


def update_risk_registry(db: Session, registry_id: int, data: RiskRegistryUpdate) -> Optional[RiskRegistryEntry]:
    """Apply a partial update; returns ``None`` when the entry does not exist.

    Levels are checked against the stored scores merged with the incoming
    ones: a mismatching level raises :class:`RiskLevelMismatch` before
    anything is written, otherwise the level is re-derived whenever both
    scores are known. ``updated_at`` is always refreshed.
    """
    entry = get_risk_registry_by_id(db, registry_id)
    if not entry:
        return None

    changes = data.model_dump(exclude_unset=True)
    for impact_field, possibility_field, level_field in LEVEL_COLUMNS:
        if not {impact_field, possibility_field, level_field} & changes.keys():
            continue

        impact = changes.get(impact_field, getattr(entry, impact_field))
        possibility = changes.get(possibility_field, getattr(entry, possibility_field))
        expected = calculate_risk_level(impact, possibility) if impact and possibility else None
        level = changes.get(level_field)
        if expected is not None and level is not None and level != expected:
            raise RiskLevelMismatch(level_field, expected, level)

        if expected is not None:
            changes[level_field] = expected
        elif level_field not in changes:
            changes[level_field] = None

    for field, value in changes.items():
        setattr(entry, field, value)

    entry.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(entry)
    logger.info("Updated risk registry entry %s (%s)", entry.id, ", ".join(sorted(changes)) or "no fields")
    return entry


def delete_risk_registry(db: Session, registry_id: int) -> bool:
    entry = get_risk_registry_by_id(db, registry_id)
    if not entry:
        return False

    db.delete(entry)
    db.commit()
    logger.info("Deleted risk registry entry %s", registry_id)
    return True
