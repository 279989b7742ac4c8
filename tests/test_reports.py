"""Tests for /api/reports."""
import io
from types import SimpleNamespace

import pandas as pd

from services.registry_csv import EXPORT_COLUMNS
from services.reports import registry_excel


def _seed(client, registry_payload, assessment_payload):
    low = client.post("/api/risk-registry", json=registry_payload(
        riskCategory="財務風險", responsibleImpact=1, responsiblePossibility=2,
    )).json()
    client.post("/api/risk-registry", json=registry_payload(responsibleImpact=5, responsiblePossibility=4))
    payload = registry_payload()
    payload.pop("responsibleImpact")
    payload.pop("responsiblePossibility")
    client.post("/api/risk-registry", json=payload)
    client.post("/api/registry-assessments", json=assessment_payload(low["id"]))


class TestSummary:
    def test_counts(self, client, registry_payload, assessment_payload):
        _seed(client, registry_payload, assessment_payload)
        body = client.get("/api/reports/summary").json()

        assert body["totalRisks"] == 3
        assert body["totalAssessments"] == 1

        bands = {row["band"]: row["count"] for row in body["bands"]}
        assert bands == {"unassessed": 1, "low": 1, "medium": 0, "high": 0, "critical": 1}

        categories = {row["category"]: row["count"] for row in body["categories"]}
        assert categories == {"策略風險": 2, "財務風險": 1}

    def test_empty_registry(self, client):
        body = client.get("/api/reports/summary").json()
        assert body["totalRisks"] == 0
        assert all(row["count"] == 0 for row in body["bands"])
        assert body["categories"] == []


class TestExports:
    def test_csv_has_bom_and_headers(self, client, registry_payload, assessment_payload):
        _seed(client, registry_payload, assessment_payload)
        resp = client.get("/api/reports/risk-registry/csv")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.content.startswith(b"\xef\xbb\xbf")

        frame = pd.read_csv(io.BytesIO(resp.content), encoding="utf-8-sig")
        assert list(frame.columns) == list(EXPORT_COLUMNS)
        assert len(frame) == 3

    def test_excel(self, client, registry_payload, assessment_payload):
        _seed(client, registry_payload, assessment_payload)
        resp = client.get("/api/reports/risk-registry/excel")
        assert resp.status_code == 200
        assert resp.content[:2] == b"PK"
        assert "risk_registry.xlsx" in resp.headers["content-disposition"]

    def test_excel_with_empty_optional_columns(self):
        entry = SimpleNamespace(**{field: None for field in EXPORT_COLUMNS.values()})
        entry.id = 1
        entry.risk_scenario = "供應商斷料"
        assert registry_excel([entry]).getvalue()[:2] == b"PK"

    def test_pdf_in_both_languages(self, client, registry_payload, assessment_payload):
        _seed(client, registry_payload, assessment_payload)

        resp = client.get("/api/reports/risk-registry/pdf")
        assert resp.status_code == 200
        assert resp.content.startswith(b"%PDF")

        client.cookies.set("lang", "en")
        resp = client.get("/api/reports/risk-registry/pdf")
        assert resp.content.startswith(b"%PDF")

    def test_pdf_with_empty_registry(self, client):
        assert client.get("/api/reports/risk-registry/pdf").content.startswith(b"%PDF")
