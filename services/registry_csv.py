"""Spreadsheet layouts for the risk registry.

The registry originates from a Traditional-Chinese Excel workbook. Import
reads that workbook's CSV export; export writes a shorter card layout.
Files may or may not start with a UTF-8 byte-order mark depending on which
program saved them, so everything is read as ``utf-8-sig``.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import pandas as pd
from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from models.risk_registry import RiskRegistryEntry
from models.schemas import Level, Score
from services.risk_registry import LEVEL_COLUMNS
from services.scoring import calculate_risk_level

logger = logging.getLogger(__name__)

# workbook column -> risk_registry column
IMPORT_COLUMNS = {
    "策略目標": "strategic_objective",
    "子策略目標": "sub_objective",
    "主責 部門 / Leader": "responsible_department",
    "風險擁有者": "risk_owner",
    "營運單位目標": "operational_target",
    "種子成員\n(風險情境提出人員)": "seed_member",
    "風險類別": "risk_category",
    "項次_Level1": "level1_index",
    "風險事件來源": "risk_event_source",
    "項次_Level2": "level2_index",
    "風險情境": "risk_scenario",
    "現有風險對策": "existing_measures",
    "監督量測指標：警戒值": "warning_indicator",
    "監督量測指標：行動值": "action_indicator",
    "關係方": "stakeholders",
    "可能性－各單位": "unit_possibility",
    "影響－各單位": "unit_impact",
    "風險等級－各單位": "unit_risk_level",
    "可能性－主責單位": "responsible_possibility",
    "影響－主責單位": "responsible_impact",
    "風險等級－主責單位": "responsible_risk_level",
    "風險回應方式\n(降低/移轉/接受/拒絕)": "response_strategy",
    "新增風險對策": "new_risk_measures",
    "負責單位": "responsible_unit",
    "優化建議 - 風險回應/控制作業/監督": "optimization_suggestion",
    "2024.11.18筆記": "notes",
    "風險等級-加權": "weighted_risk_level",
    "優化建議 - 風險評估\n(N/A: 討論後無須優化)": "assessment_optimization",
}

INTEGER_FIELDS = {
    "unit_possibility",
    "unit_impact",
    "unit_risk_level",
    "responsible_possibility",
    "responsible_impact",
    "responsible_risk_level",
}

SCORE = TypeAdapter(Optional[Score])
LEVEL = TypeAdapter(Optional[Level])

# rows missing any of these are blank spacer rows in the workbook
KEY_FIELDS = ("strategic_objective", "sub_objective", "risk_scenario")

# export header -> risk_registry column
EXPORT_COLUMNS = {
    "風險ID": "id",
    "戰略目標": "strategic_objective",
    "子目標": "sub_objective",
    "主責部門": "responsible_department",
    "風險擁有者": "risk_owner",
    "營運目標": "operational_target",
    "風險類別": "risk_category",
    "風險情境": "risk_scenario",
    "現有控制措施": "existing_measures",
    "警戒指標": "warning_indicator",
    "行動指標": "action_indicator",
    "關係方": "stakeholders",
    "各單位可能性": "unit_possibility",
    "各單位影響度": "unit_impact",
    "各單位風險等級": "unit_risk_level",
    "主責單位可能性": "responsible_possibility",
    "主責單位影響度": "responsible_impact",
    "主責單位風險等級": "responsible_risk_level",
    "回應策略": "response_strategy",
    "新增對策": "new_risk_measures",
    "優化建議": "optimization_suggestion",
    "加權風險等級": "weighted_risk_level",
    "評估優化": "assessment_optimization",
}


def clean_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip().replace("\r", "").replace("\n", " ")


def parse_number(value):
    text = clean_text(value)
    if not text or text == "-":
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _as_int(number):
    # fractional scores are passed through so validation rejects them
    if number is not None and number == number.to_integral_value():
        return int(number)
    return number


def check_scores(row: dict):
    """Validate and fill in a row's score columns; raises ``ValueError``."""
    for impact_field, possibility_field, level_field in LEVEL_COLUMNS:
        impact = SCORE.validate_python(row[impact_field])
        possibility = SCORE.validate_python(row[possibility_field])
        level = LEVEL.validate_python(row[level_field])

        if impact and possibility:
            expected = calculate_risk_level(impact, possibility)
            if level is not None and level != expected:
                raise ValueError(f"{level_field} is {level}, expected {expected}")
            level = expected

        row.update({impact_field: impact, possibility_field: possibility, level_field: level})


def read_registry_csv(source) -> pd.DataFrame:
    return pd.read_csv(source, dtype=str, keep_default_na=False, encoding="utf-8-sig")


def rows_from_frame(frame: pd.DataFrame) -> list:
    """Turn workbook rows into risk_registry column dicts.

    Blank rows are dropped silently; rows with out-of-range or inconsistent
    scores are logged and skipped.
    """
    rows = []
    for number, record in enumerate(frame.to_dict(orient="records"), start=1):
        row = {}
        for header, field in IMPORT_COLUMNS.items():
            raw = record.get(header, "")
            if field in INTEGER_FIELDS:
                row[field] = _as_int(parse_number(raw))
            elif field == "weighted_risk_level":
                row[field] = parse_number(raw)
            else:
                row[field] = clean_text(raw)

        if not all(row[field] for field in KEY_FIELDS):
            continue
        try:
            check_scores(row)
        except ValueError as exc:
            logger.warning("Skipping row %s (%s): %s", number, row["level2_index"] or "-", exc)
            continue
        rows.append(row)
    return rows


def import_registry_rows(db: Session, rows: list, batch_size: int = 50) -> int:
    """Insert rows in committed batches.

    A failing batch is rolled back and re-raised; batches committed before it
    stay in the table.
    """
    imported = 0
    for start in range(0, len(rows), batch_size):
        batch = rows[start:start + batch_size]
        batch_number = start // batch_size + 1
        try:
            db.add_all([RiskRegistryEntry(**row) for row in batch])
            db.commit()
        except Exception:
            db.rollback()
            logger.error("Batch %s failed after %s rows were imported", batch_number, imported)
            raise
        imported += len(batch)
        logger.info("Imported batch %s: %s/%s rows", batch_number, imported, len(rows))
    return imported


def registry_frame(entries) -> pd.DataFrame:
    data = [
        {header: getattr(entry, field) for header, field in EXPORT_COLUMNS.items()}
        for entry in entries
    ]
    return pd.DataFrame(data, columns=list(EXPORT_COLUMNS))


def registry_csv(entries, bom: bool = True) -> str:
    """CSV text of the registry; the BOM variant is the one Excel opens correctly."""
    text = registry_frame(entries).to_csv(index=False, lineterminator="\n")
    return "\ufeff" + text if bom else text
