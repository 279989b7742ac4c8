"""Tests for client.api_client against the app through TestClient."""
import pytest
from fastapi.testclient import TestClient

from client.api_client import ApiError, ResourceCache, RiskRegistryClient


@pytest.fixture
def api():
    from main import app

    with TestClient(app) as http:
        yield RiskRegistryClient(client=http)


class TestResourceCache:
    def test_key_sorts_query(self):
        assert ResourceCache.key("/api/x", {"b": 2, "a": 1}) == "/api/x?a=1&b=2"
        assert ResourceCache.key("/api/x") == "/api/x"

    def test_invalidate_by_prefix(self):
        cache = ResourceCache()
        cache.set("/api/risk-registry", [])
        cache.set("/api/risk-registry/1", {})
        cache.set("/api/risk-categories?year=2024", [])

        assert cache.invalidate("/api/risk-registry") == 2
        assert "/api/risk-registry/1" not in cache
        assert "/api/risk-categories?year=2024" in cache


class TestRiskRegistryClient:
    def test_reads_are_cached_until_mutation(self, api, client, registry_payload):
        assert api.list_risks() == []

        # written behind the client's back: cache still answers
        client.post("/api/risk-registry", json=registry_payload())
        assert api.list_risks() == []

        api.create_risk(registry_payload(riskScenario="second"))
        assert len(api.list_risks()) == 2

    def test_assessment_invalidates_its_collection(self, api, registry_payload, assessment_payload):
        risk = api.create_risk(registry_payload())
        assert api.assessments_for_risk(risk["id"]) == []

        api.submit_assessment(assessment_payload(risk["id"]))
        rows = api.assessments_for_risk(risk["id"])
        assert [row["riskLevel"] for row in rows] == [16]

        comparison = api.compare_assessment(rows[0]["id"])
        assert comparison["priorRiskLevel"] == 8

    def test_registry_change_refreshes_comparison(self, api, registry_payload, assessment_payload):
        risk = api.create_risk(registry_payload())
        assessment = api.submit_assessment(assessment_payload(risk["id"]))
        assert api.compare_assessment(assessment["id"])["priorRiskLevel"] == 8

        api.update_risk(risk["id"], {"responsibleImpact": 5, "responsiblePossibility": 5})
        assert api.compare_assessment(assessment["id"])["priorRiskLevel"] == 25

        api.delete_risk(risk["id"])
        assert api.compare_assessment(assessment["id"])["hasPrior"] is False

    def test_summary_refreshes_after_writes(self, api, registry_payload):
        assert api.summary()["totalRisks"] == 0
        api.create_risk(registry_payload())
        assert api.summary()["totalRisks"] == 1

    def test_year_is_part_of_cache_key(self, api):
        api.create_strategic_objective({"name": "a", "leader": "b"}, year=2024)
        assert len(api.strategic_objectives(year=2024)) == 1
        assert api.strategic_objectives(year=2025) == []

    def test_errors_raise_api_error(self, api, assessment_payload):
        with pytest.raises(ApiError) as excinfo:
            api.get_risk(404404)
        assert excinfo.value.status_code == 404
        assert excinfo.value.payload == {"message": "Risk registry entry not found"}

        with pytest.raises(ApiError) as excinfo:
            api.submit_assessment(assessment_payload(1, currentImpact=6))
        assert excinfo.value.status_code == 400
        assert excinfo.value.payload["message"] == "Validation error"

    def test_failed_mutation_keeps_cache(self, api, registry_payload):
        api.list_risks()
        with pytest.raises(ApiError):
            api.delete_risk(999)
        assert "/api/risk-registry" in api.cache
