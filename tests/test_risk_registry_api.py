"""Tests for /api/risk-registry."""
from decimal import Decimal


class TestCreateRegistryEntry:
    def test_create_returns_record(self, client, registry_payload):
        resp = client.post("/api/risk-registry", json=registry_payload())
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] > 0
        assert body["riskCategory"] == "策略風險"
        assert body["unitRiskLevel"] == 12
        assert body["responsibleRiskLevel"] == 8
        assert body["unitRiskBand"] == "high"
        assert body["responsibleRiskBand"] == "medium"
        assert body["createdAt"]

    def test_unscored_entry_is_unassessed(self, client, registry_payload):
        payload = registry_payload()
        for key in ("unitPossibility", "unitImpact", "responsiblePossibility", "responsibleImpact"):
            payload.pop(key)
        body = client.post("/api/risk-registry", json=payload).json()
        assert body["responsibleRiskLevel"] is None
        assert body["responsibleRiskBand"] == "unassessed"

    def test_weighted_level_keeps_decimals(self, client, registry_payload):
        body = client.post("/api/risk-registry", json=registry_payload(weightedRiskLevel="12.5")).json()
        assert Decimal(str(body["weightedRiskLevel"])) == Decimal("12.5")

    def test_missing_required_field(self, client, registry_payload):
        payload = registry_payload()
        payload.pop("riskScenario")
        resp = client.post("/api/risk-registry", json=payload)
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "Validation error"
        assert ["body", "riskScenario"] in [e["loc"] for e in body["errors"]]

    def test_empty_required_text_rejected(self, client, registry_payload):
        resp = client.post("/api/risk-registry", json=registry_payload(riskOwner=""))
        assert resp.status_code == 400

    def test_score_out_of_range(self, client, registry_payload):
        resp = client.post("/api/risk-registry", json=registry_payload(unitImpact=6))
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["loc"] == ["body", "unitImpact"]

    def test_inconsistent_level_rejected(self, client, registry_payload):
        resp = client.post("/api/risk-registry", json=registry_payload(unitRiskLevel=20))
        assert resp.status_code == 400
        assert "unitRiskLevel" in resp.json()["errors"][0]["msg"]

    def test_nothing_written_on_validation_error(self, client, registry_payload):
        client.post("/api/risk-registry", json=registry_payload(unitImpact=0))
        assert client.get("/api/risk-registry").json() == []


class TestReadRegistry:
    def test_list_in_id_order(self, client, registry_payload):
        ids = [client.post("/api/risk-registry", json=registry_payload(level2Index=f"1.{i}")).json()["id"] for i in range(3)]
        listed = client.get("/api/risk-registry").json()
        assert [row["id"] for row in listed] == ids

    def test_get_by_id(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload(notes="季度檢討", weightedRiskLevel="10.5")).json()
        resp = client.get(f"/api/risk-registry/{created['id']}")
        assert resp.status_code == 200

        fetched = resp.json()
        for stamp in ("createdAt", "updatedAt"):
            created.pop(stamp)
            fetched.pop(stamp)
        assert fetched == created
        for key, value in registry_payload().items():
            assert fetched[key] == value

    def test_get_missing(self, client):
        resp = client.get("/api/risk-registry/9999")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Risk registry entry not found"}

    def test_non_numeric_id(self, client):
        resp = client.get("/api/risk-registry/abc")
        assert resp.status_code == 400


class TestUpdateRegistry:
    def test_partial_update(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload()).json()
        resp = client.put(f"/api/risk-registry/{created['id']}", json={"responseStrategy": "降低"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["responseStrategy"] == "降低"
        assert body["riskOwner"] == created["riskOwner"]

    def test_update_rescores(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload()).json()
        body = client.put(
            f"/api/risk-registry/{created['id']}",
            json={"responsibleImpact": 5, "responsiblePossibility": 5},
        ).json()
        assert body["responsibleRiskLevel"] == 25
        assert body["responsibleRiskBand"] == "critical"

    def test_null_required_text_rejected(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload()).json()
        resp = client.put(f"/api/risk-registry/{created['id']}", json={"strategicObjective": None})
        assert resp.status_code == 400

    def test_level_alone_must_match_stored_scores(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload()).json()
        resp = client.put(f"/api/risk-registry/{created['id']}", json={"unitRiskLevel": 20})
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["loc"] == ["body", "unitRiskLevel"]

        stored = client.get(f"/api/risk-registry/{created['id']}").json()
        assert (stored["unitImpact"], stored["unitPossibility"], stored["unitRiskLevel"]) == (4, 3, 12)

    def test_score_and_level_checked_against_merged_entry(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload()).json()
        resp = client.put(
            f"/api/risk-registry/{created['id']}",
            json={"responsibleImpact": 1, "responsibleRiskLevel": 25},
        )
        assert resp.status_code == 400
        assert client.get(f"/api/risk-registry/{created['id']}").json()["responsibleRiskLevel"] == 8

    def test_matching_level_is_accepted(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload()).json()
        resp = client.put(
            f"/api/risk-registry/{created['id']}",
            json={"responsibleImpact": 1, "responsibleRiskLevel": 2},
        )
        assert resp.status_code == 200
        assert resp.json()["responsibleRiskLevel"] == 2

    def test_update_missing(self, client):
        resp = client.put("/api/risk-registry/9999", json={"notes": "x"})
        assert resp.status_code == 404


class TestDeleteRegistry:
    def test_delete(self, client, registry_payload):
        created = client.post("/api/risk-registry", json=registry_payload()).json()
        resp = client.delete(f"/api/risk-registry/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Risk registry entry deleted successfully"}
        assert client.get(f"/api/risk-registry/{created['id']}").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/risk-registry/9999").status_code == 404
