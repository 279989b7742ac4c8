"""HTTP client for the risk registry API.

GET responses are cached per client instance, keyed by the resource path
plus its sorted query string. A successful POST/PUT/DELETE drops every
cached entry under the mutated collection, so the next read goes back to
the server.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

logger = logging.getLogger(__name__)

# cached reads computed from another collection; summaries read everything
DERIVED = {
    "/api/risk-registry": ("/api/registry-assessments",),
}
REPORTS = "/api/reports"


class ApiError(Exception):
    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        message = payload.get("message") if isinstance(payload, dict) else payload
        super().__init__(f"{status_code}: {message}")


class ResourceCache:
    def __init__(self):
        self._entries: Dict[str, Any] = {}

    @staticmethod
    def key(path: str, params: Optional[dict] = None) -> str:
        if not params:
            return path
        return f"{path}?{urlencode(sorted(params.items()))}"

    def get(self, key: str):
        return self._entries.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def set(self, key: str, value: Any):
        self._entries[key] = value

    def invalidate(self, prefix: str) -> int:
        stale = [key for key in self._entries if key.startswith(prefix)]
        for key in stale:
            del self._entries[key]
        return len(stale)


class RiskRegistryClient:
    def __init__(self, base_url: str = "http://localhost:8000", client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.http = client or httpx.Client(base_url=base_url, timeout=timeout)
        self.cache = ResourceCache()

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # plumbing

    def _decode(self, response: httpx.Response):
        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        if response.is_error:
            logger.warning("%s %s failed with %s", response.request.method, response.request.url, response.status_code)
            raise ApiError(response.status_code, payload)
        return payload

    def _get(self, path: str, params: Optional[dict] = None):
        key = self.cache.key(path, params)
        if key in self.cache:
            return self.cache.get(key)

        data = self._decode(self.http.get(path, params=params))
        self.cache.set(key, data)
        return data

    def _send(self, method: str, path: str, collection: str, json: Optional[dict] = None, params: Optional[dict] = None):
        data = self._decode(self.http.request(method, path, json=json, params=params))
        prefixes = (collection, *DERIVED.get(collection, ()), REPORTS)
        dropped = sum(self.cache.invalidate(prefix) for prefix in prefixes)
        logger.debug("%s %s invalidated %s cached entries", method, path, dropped)
        return data

    # risk registry

    def list_risks(self):
        return self._get("/api/risk-registry")

    def get_risk(self, risk_id: int):
        return self._get(f"/api/risk-registry/{risk_id}")

    def create_risk(self, payload: dict):
        return self._send("POST", "/api/risk-registry", "/api/risk-registry", json=payload)

    def update_risk(self, risk_id: int, changes: dict):
        return self._send("PUT", f"/api/risk-registry/{risk_id}", "/api/risk-registry", json=changes)

    def delete_risk(self, risk_id: int):
        return self._send("DELETE", f"/api/risk-registry/{risk_id}", "/api/risk-registry")

    # registry assessments

    def list_assessments(self):
        return self._get("/api/registry-assessments")

    def get_assessment(self, assessment_id: int):
        return self._get(f"/api/registry-assessments/{assessment_id}")

    def assessments_for_risk(self, risk_id: int):
        return self._get(f"/api/registry-assessments/risk/{risk_id}")

    def compare_assessment(self, assessment_id: int):
        return self._get(f"/api/registry-assessments/{assessment_id}/comparison")

    def submit_assessment(self, payload: dict):
        return self._send("POST", "/api/registry-assessments", "/api/registry-assessments", json=payload)

    # legacy questionnaire

    def list_questionnaires(self):
        return self._get("/api/risk-assessments")

    def submit_questionnaire(self, payload: dict):
        return self._send("POST", "/api/risk-assessments", "/api/risk-assessments", json=payload)

    # taxonomy

    def strategic_objectives(self, year: Optional[int] = None):
        return self._get("/api/strategic-objectives", _year(year))

    def create_strategic_objective(self, payload: dict, year: Optional[int] = None):
        return self._send("POST", "/api/strategic-objectives", "/api/strategic-objectives", json=payload, params=_year(year))

    def delete_strategic_objective(self, objective_id: int):
        return self._send("DELETE", f"/api/strategic-objectives/{objective_id}", "/api/strategic-objectives")

    def sub_strategic_objectives(self, objective_id: int, year: Optional[int] = None):
        return self._get(f"/api/sub-strategic-objectives/{objective_id}", _year(year))

    def create_sub_strategic_objective(self, objective_id: int, payload: dict, year: Optional[int] = None):
        return self._send(
            "POST", f"/api/sub-strategic-objectives/{objective_id}", "/api/sub-strategic-objectives",
            json=payload, params=_year(year),
        )

    def delete_sub_strategic_objective(self, sub_id: int):
        return self._send("DELETE", f"/api/sub-strategic-objectives/item/{sub_id}", "/api/sub-strategic-objectives")

    def risk_categories(self, year: Optional[int] = None):
        return self._get("/api/risk-categories", _year(year))

    def create_risk_category(self, payload: dict, year: Optional[int] = None):
        return self._send("POST", "/api/risk-categories", "/api/risk-categories", json=payload, params=_year(year))

    def delete_risk_category(self, category_id: int):
        return self._send("DELETE", f"/api/risk-categories/{category_id}", "/api/risk-categories")

    def strategic_mappings(self, objective_id: Optional[int] = None, sub_id: Optional[int] = None, year: Optional[int] = None):
        if objective_id is not None and sub_id is not None:
            return self._get(f"/api/strategic-mappings/{objective_id}/{sub_id}", _year(year))
        return self._get("/api/strategic-mappings", _year(year))

    def create_strategic_mapping(self, payload: dict, year: Optional[int] = None):
        return self._send("POST", "/api/strategic-mappings", "/api/strategic-mappings", json=payload, params=_year(year))

    def delete_strategic_mapping(self, mapping_id: int):
        return self._send("DELETE", f"/api/strategic-mappings/item/{mapping_id}", "/api/strategic-mappings")

    # reports

    def summary(self):
        return self._get("/api/reports/summary")


def _year(year: Optional[int]) -> Optional[dict]:
    return {"year": year} if year is not None else None
