"""Registry summary and the Excel/PDF exports built on it."""
import io
import logging
from collections import Counter
from xml.sax.saxutils import escape

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, Image
from sqlalchemy.orm import Session

from models.registry_assessment import RegistryAssessment
from services.registry_csv import registry_frame
from services.risk_registry import get_all_risk_registry
from services.scoring import RiskBand, BAND_COLORS, BAND_LABELS, classify_risk_level
from services.translate import translate_band

logger = logging.getLogger(__name__)

# CID font bundled with reportlab, covers Traditional Chinese
PDF_FONT = "MSung-Light"
pdfmetrics.registerFont(UnicodeCIDFont(PDF_FONT))

SHEET_NAME = "風險登錄表"

PDF_TITLES = {
    "zh": "風險登錄表報告",
    "en": "Risk Registry Report",
}

PDF_HEADERS = {
    "zh": ["風險ID", "風險類別", "主責部門", "風險情境", "主責單位風險等級", "風險程度"],
    "en": ["Risk ID", "Category", "Department", "Scenario", "Risk Level", "Band"],
}


def build_summary(db: Session) -> dict:
    entries = get_all_risk_registry(db)

    band_counts = Counter(classify_risk_level(entry.responsible_risk_level) for entry in entries)
    category_counts = Counter(entry.risk_category for entry in entries)

    return {
        "total_risks": len(entries),
        "total_assessments": db.query(RegistryAssessment).count(),
        "bands": [
            {"band": band, "label": BAND_LABELS[band], "count": band_counts.get(band, 0)}
            for band in RiskBand
        ],
        "categories": [
            {"category": category, "count": count}
            for category, count in sorted(category_counts.items())
        ],
    }


def registry_excel(entries) -> io.BytesIO:
    df = registry_frame(entries)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        worksheet = writer.sheets[SHEET_NAME]
        for i, col in enumerate(df.columns):
            longest = int(df[col].fillna("").astype(str).str.len().max()) if len(df) else 0
            worksheet.set_column(i, i, min(max(longest, len(col)) + 2, 60))

    output.seek(0)
    return output


def _band_chart(entries) -> io.BytesIO:
    counts = Counter(classify_risk_level(entry.responsible_risk_level) for entry in entries)
    bands = list(RiskBand)

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.bar(
        [BAND_LABELS[band] for band in bands],
        [counts.get(band, 0) for band in bands],
        color=[BAND_COLORS[band] for band in bands],
    )
    ax.set_title("Risks by band")
    ax.set_ylabel("Risks")

    img_buffer = io.BytesIO()
    fig.savefig(img_buffer, format="png", bbox_inches="tight")
    plt.close(fig)
    img_buffer.seek(0)
    return img_buffer


def registry_pdf(entries, lang: str = "zh") -> bytes:
    lang = lang if lang in PDF_TITLES else "zh"

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
    )

    styles = getSampleStyleSheet()
    styles["Title"].fontName = PDF_FONT
    styles["Normal"].fontName = PDF_FONT
    styles["Normal"].fontSize = 8

    elements = [Paragraph(PDF_TITLES[lang], styles["Title"]), Spacer(1, 12)]

    rows = [
        [
            str(entry.id),
            entry.risk_category,
            entry.responsible_department,
            Paragraph(escape(entry.risk_scenario), styles["Normal"]),
            str(entry.responsible_risk_level) if entry.responsible_risk_level else "-",
            translate_band(classify_risk_level(entry.responsible_risk_level), lang),
        ]
        for entry in entries
    ]

    table = Table([PDF_HEADERS[lang]] + rows, colWidths=[2 * cm, 3 * cm, 4 * cm, 11 * cm, 3 * cm, 3 * cm], repeatRows=1)
    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), PDF_FONT),
        ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        ("FONTSIZE", (0, 1), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
    ]))
    elements.append(table)
    elements.append(Spacer(1, 12))
    elements.append(Image(_band_chart(entries), width=20 * cm, height=7.5 * cm))

    doc.build(elements)
    logger.info("Built registry PDF with %s rows (%s)", len(entries), lang)
    return buffer.getvalue()
