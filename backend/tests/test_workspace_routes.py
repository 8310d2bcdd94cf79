"""
test_workspace_routes.py — HTTP tests for the workspace matcher API.

Tests cover:
  - GET  /api/workspace/sizes
  - POST /api/workspace/validate
  - POST /api/workspace/match (custom catalog, default catalog, top_n, 422)
  - POST /api/workspace/cost-estimate (priced, zero capacity → 422)
  - GET  /health: tracker metrics, per-route request and rejection counts
  - request-timing headers

The app runs in-process through TestClient; no network or database.
"""

BRACKET = {
    "length": 200,
    "width": 150,
    "quantity": 10,
    "margin": 5,
    "rotation_allowed": False,
    "unit": "metric",
}
MEDIUM_BED = {"length": 1300, "width": 900, "common_name": "1300x900mm", "category": "medium"}


class TestCatalogAndValidation:

    def test_sizes(self, api_client):
        resp = api_client.get("/api/workspace/sizes")
        assert resp.status_code == 200
        sizes = resp.json()
        assert len(sizes) == 10
        assert sizes[0]["common_name"] == "600x400mm"
        assert sizes[-1]["category"] == "industrial"

    def test_validate_reports_all_errors(self, api_client):
        resp = api_client.post("/api/workspace/validate", json={})
        assert resp.status_code == 200
        body = resp.json()
        assert body["valid"] is False
        assert body["errors"] == [
            "Length must be greater than 0",
            "Width must be greater than 0",
            "Quantity must be at least 1",
        ]

    def test_validate_overflowing_quantity(self, api_client):
        """1e999 parses to inf in JSON; reported as invalid, not a 500."""
        resp = api_client.post(
            "/api/workspace/validate",
            content='{"length": 200, "width": 150, "quantity": 1e999, "margin": 5}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 200
        assert resp.json() == {"valid": False, "errors": ["Quantity must be at least 1"]}

    def test_validate_ok(self, api_client):
        resp = api_client.post("/api/workspace/validate", json=BRACKET)
        assert resp.json() == {"valid": True, "errors": []}


class TestMatch:

    def test_match_custom_catalog(self, api_client):
        resp = api_client.post(
            "/api/workspace/match",
            json={"workpiece": BRACKET, "candidates": [MEDIUM_BED]},
        )
        assert resp.status_code == 200
        body = resp.json()
        [result] = body["results"]
        assert result["layout"]["total_parts"] == 30
        assert result["match_score"] == 64
        assert result["is_optimal"] is False
        assert result["workspace_display"] == "1300mm x 900mm"
        assert body["recommended"]["workspace"]["common_name"] == "1300x900mm"

        cost = body["recommended_cost"]
        assert cost["sheets_needed"] == 1
        assert cost["total_estimated_cost"] is None
        assert cost["area_display"] == {
            "total": "1.17 m²",
            "used": "9000 cm²",
            "wasted": "2700 cm²",
        }

    def test_match_default_catalog_top_n(self, api_client):
        resp = api_client.post(
            "/api/workspace/match",
            json={"workpiece": BRACKET, "top_n": 3, "cost_per_sheet": 50},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["results"]) == 3
        scores = [r["match_score"] for r in body["results"]]
        assert scores == sorted(scores, reverse=True)
        assert body["recommended_cost"]["total_estimated_cost"] == 50 * body["recommended_cost"]["sheets_needed"]

    def test_match_imperial_display(self, api_client):
        wp = dict(BRACKET, length=8, width=6, margin=0.2, unit="imperial")
        resp = api_client.post(
            "/api/workspace/match",
            json={"workpiece": wp, "candidates": [MEDIUM_BED]},
        )
        assert resp.status_code == 200
        assert resp.json()["results"][0]["workspace_display"] == '51.18" x 35.43"'

    def test_match_invalid_input_422(self, api_client):
        resp = api_client.post(
            "/api/workspace/match",
            json={"workpiece": dict(BRACKET, quantity=0)},
        )
        assert resp.status_code == 422
        assert "Quantity must be at least 1" in resp.json()["detail"]["errors"]

    def test_match_overflowing_quantity_422(self, api_client):
        resp = api_client.post(
            "/api/workspace/match",
            content='{"workpiece": {"length": 200, "width": 150, "quantity": 1e999, "margin": 5}}',
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422
        assert resp.json()["detail"]["errors"] == ["Quantity must be at least 1"]

    def test_match_zero_fit_has_no_cost(self, api_client):
        wp = dict(BRACKET, length=5000, width=5000)
        resp = api_client.post(
            "/api/workspace/match",
            json={"workpiece": wp, "candidates": [MEDIUM_BED]},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["results"][0]["layout"]["total_parts"] == 0
        assert body["recommended_cost"] is None

    def test_match_empty_catalog(self, api_client):
        resp = api_client.post(
            "/api/workspace/match",
            json={"workpiece": BRACKET, "candidates": []},
        )
        assert resp.status_code == 200
        assert resp.json()["results"] == []
        assert resp.json()["recommended"] is None


class TestCostEstimateRoute:

    def _match(self, api_client, workpiece):
        resp = api_client.post(
            "/api/workspace/match",
            json={"workpiece": workpiece, "candidates": [MEDIUM_BED]},
        )
        return resp.json()["results"][0]

    def test_priced_estimate(self, api_client):
        match = self._match(api_client, BRACKET)
        resp = api_client.post(
            "/api/workspace/cost-estimate",
            json={"match": match, "required_quantity": 65, "cost_per_sheet": 120},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["sheets_needed"] == 3
        assert abs(body["total_estimated_cost"] - 360.0) < 1e-9

    def test_zero_capacity_422(self, api_client):
        match = self._match(api_client, dict(BRACKET, length=5000, width=5000))
        resp = api_client.post(
            "/api/workspace/cost-estimate",
            json={"match": match, "required_quantity": 1},
        )
        assert resp.status_code == 422


class TestHealth:

    def test_health_reports_metrics(self, api_client):
        api_client.post("/api/workspace/match", json={"workpiece": BRACKET})
        resp = api_client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "active"
        assert body["metrics"]["matches_completed"] == 1

    def test_timing_headers(self, api_client):
        resp = api_client.get("/api/workspace/sizes")
        assert "X-Request-ID" in resp.headers
        assert float(resp.headers["X-Process-Time"]) >= 0

    def test_rejections_counted_per_route(self, api_client):
        """One rejected and one accepted match; /health itself is not counted."""
        api_client.post("/api/workspace/match", json={"workpiece": dict(BRACKET, quantity=0)})
        api_client.post("/api/workspace/match", json={"workpiece": BRACKET, "candidates": [MEDIUM_BED]})
        api_client.get("/api/workspace/sizes")
        api_client.get("/health")

        metrics = api_client.get("/health").json()["metrics"]
        assert metrics["requests_by_route"] == {
            "/api/workspace/match": 2,
            "/api/workspace/sizes": 1,
        }
        assert metrics["rejections_by_route"] == {"/api/workspace/match": 1}
        assert metrics["validation_failures"] == 1
