"""HTTP tests for health, middleware headers and error normalization."""

from __future__ import annotations


class TestHealth:
    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["success"] is True
        assert body["data"]["service"] == "showcase-api"
        assert body["data"]["store"] == "connected"
        assert body["data"]["status"] == "healthy"

    def test_ready_and_live_when_store_down(self, client, probe):
        probe.available = False
        ready = client.get("/api/health/ready")
        assert ready.status_code == 503
        assert ready.json()["data"]["store"] == "disconnected"
        assert client.get("/api/health/live").status_code == 200
        assert client.get("/api/health").json()["data"]["status"] == "degraded"


class TestMiddleware:
    def test_standard_headers(self, client):
        resp = client.get("/api/achievements")
        assert resp.headers["X-DB-Status"] == "connected"
        assert "X-Request-ID" in resp.headers
        assert float(resp.headers["X-Process-Time-Ms"]) >= 0

    def test_request_id_is_echoed(self, client):
        resp = client.get("/api/health/live", headers={"X-Request-ID": "req-42"})
        assert resp.headers["X-Request-ID"] == "req-42"

    def test_oversized_request_id_is_replaced(self, client):
        resp = client.get("/api/health/live", headers={"X-Request-ID": "x" * 500})
        assert len(resp.headers["X-Request-ID"]) == 32

    def test_cors_allow_list(self, client):
        resp = client.get("/api/health/live", headers={"Origin": "http://localhost:3000"})
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert "X-DB-Status" in resp.headers["access-control-expose-headers"]

    def test_cors_rejects_unknown_origin(self, client):
        resp = client.get("/api/health/live", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in resp.headers


class TestErrors:
    def test_unknown_route(self, client):
        resp = client.get("/api/press-releases")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Route not found"}

    def test_non_object_body(self, client, admin_headers):
        resp = client.post("/api/achievements", json=["not", "an", "object"], headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_unexpected_error_is_hidden(self, app, client, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("secret detail")

        monkeypatch.setattr(app.state.access.reader, "read_many", explode)
        resp = client.get("/api/achievements")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Server error"}
