import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from dependencies.lang import get_lang
from models.schemas import RegistrySummaryOut
from routes.responses import internal_error
from services.registry_csv import registry_csv
from services.reports import build_summary, registry_excel, registry_pdf
from services.risk_registry import get_all_risk_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=RegistrySummaryOut)
def registry_summary(db: Session = Depends(get_db)):
    try:
        return build_summary(db)
    except SQLAlchemyError:
        logger.exception("Error building registry summary")
        return internal_error()


@router.get("/risk-registry/csv")
def export_registry_csv(db: Session = Depends(get_db)):
    try:
        entries = get_all_risk_registry(db)
    except SQLAlchemyError:
        logger.exception("Error exporting risk registry to CSV")
        return internal_error()

    headers = {"Content-Disposition": "attachment; filename=risk_registry.csv"}
    return Response(
        content=registry_csv(entries).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers=headers,
    )


@router.get("/risk-registry/excel")
def export_registry_excel(db: Session = Depends(get_db)):
    try:
        entries = get_all_risk_registry(db)
    except SQLAlchemyError:
        logger.exception("Error exporting risk registry to Excel")
        return internal_error()

    headers = {
        "Content-Disposition": "attachment; filename=risk_registry.xlsx",
        "Content-Type": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
    return StreamingResponse(registry_excel(entries), headers=headers)


@router.get("/risk-registry/pdf")
def export_registry_pdf(db: Session = Depends(get_db), lang: str = Depends(get_lang)):
    try:
        entries = get_all_risk_registry(db)
    except SQLAlchemyError:
        logger.exception("Error exporting risk registry to PDF")
        return internal_error()

    headers = {
        "Content-Disposition": "attachment; filename=risk_registry.pdf",
        "Content-Type": "application/pdf",
    }
    return Response(content=registry_pdf(entries, lang), headers=headers)
