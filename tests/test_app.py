"""Tests for application assembly: middleware, error handling, persistence wiring."""

from __future__ import annotations

import logging
from types import SimpleNamespace

from fastapi.testclient import TestClient

from run import bound_port, build_server
from storefront_api.app.core.config import Settings
from storefront_api.app.main import create_app


def _client(**overrides) -> TestClient:
    return TestClient(create_app(Settings(**overrides)))


class TestUnexpectedErrors:
    """Failures inside a route become 500 responses with the raw error."""

    def test_store_failure_is_500(self, app, client, monkeypatch):
        def explode():
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(app.state.user_service.store, "find_all", explode)
        response = client.get("/users")
        assert response.status_code == 500
        assert response.json() == {"error": {"type": "RuntimeError", "message": "disk on fire"}}

    def test_storage_error_is_500(self, tmp_path, user_payload):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        client = _client(middleware=(), data_dir=str(blocker))
        response = client.post("/register", json=user_payload)
        assert response.status_code == 500
        assert response.json()["error"]["type"] == "StorageError"
        assert client.get("/users").status_code == 404


class TestOptionalMiddleware:
    def test_security_headers(self):
        response = _client(middleware=("security_headers",)).get("/users")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Content-Security-Policy"].startswith("default-src 'self';")
        assert response.headers["Origin-Agent-Cluster"] == "?1"
        assert response.headers["X-Permitted-Cross-Domain-Policies"] == "none"

    def test_no_security_headers_when_disabled(self, client):
        assert "X-Content-Type-Options" not in client.get("/users").headers

    def test_cors(self):
        response = _client(middleware=("cors",)).get("/users", headers={"Origin": "http://example.com"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_request_logging(self, caplog):
        client = _client(middleware=("request_logging",))
        with caplog.at_level(logging.INFO, logger="storefront_api.app.core.middleware"):
            client.get("/users")
        assert any("GET /users -> 404" in record.getMessage() for record in caplog.records)


class TestPersistenceWiring:
    def test_data_dir_survives_restart(self, tmp_path, user_payload):
        first = _client(middleware=(), data_dir=str(tmp_path))
        user = first.post("/register", json=user_payload).json()["newUser"]
        assert (tmp_path / "users.json").exists()

        second = _client(middleware=(), data_dir=str(tmp_path))
        assert second.get(f"/users/{user['id']}").json() == {"user": user}
        assert second.get("/products").status_code == 404


class TestServerBuild:
    def test_missing_port_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            server = build_server(Settings(middleware=()))
        assert server.config.port == 0
        assert "No port value specified..." in caplog.text

    def test_explicit_port(self):
        server = build_server(Settings(port=3000, host="127.0.0.1", middleware=()))
        assert server.config.port == 3000
        assert server.config.host == "127.0.0.1"
        assert server.config.log_config is None


class TestBoundPort:
    def _server(self, servers, port=0):
        return SimpleNamespace(servers=servers, config=SimpleNamespace(port=port))

    def test_reads_os_assigned_port(self):
        sock = SimpleNamespace(getsockname=lambda: ("127.0.0.1", 54321))
        assert bound_port(self._server([SimpleNamespace(sockets=[sock])])) == 54321

    def test_falls_back_to_configured_port(self):
        assert bound_port(self._server([], port=3000)) == 3000
