"""Tests for request logging and secret redaction."""
import logging

from fastapi.testclient import TestClient

from src.server.middleware.logging import sanitize_dict


class TestSanitizeDict:
    def test_redacts_secrets(self) -> None:
        sanitized = sanitize_dict({"sessionId": "ABC12345", "role": "host", "secret": "s3cr3t"})
        assert sanitized == {"sessionId": "ABC12345", "role": "host", "secret": "[REDACTED]"}

    def test_redacts_client_id_alias_case_insensitively(self) -> None:
        assert sanitize_dict({"clientId": "x"}) == {"clientId": "[REDACTED]"}
        assert sanitize_dict({"hostSecret": "x"}) == {"hostSecret": "[REDACTED]"}

    def test_nested_mappings(self) -> None:
        sanitized = sanitize_dict({"outer": {"Authorization": "Bearer t", "ok": 1}})
        assert sanitized == {"outer": {"Authorization": "[REDACTED]", "ok": 1}}


class TestRequestLogging:
    def test_requests_are_logged(self, client: TestClient, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="relay.server"):
            client.get("/health")
        assert "Request: GET /health" in caplog.text
        assert "status=200" in caplog.text

    def test_query_secrets_are_redacted(self, client: TestClient, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="relay.server"):
            client.get("/health?secret=hunter2&verbose=1")
        server_logs = "\n".join(r.getMessage() for r in caplog.records if r.name == "relay.server")
        assert "[REDACTED]" in server_logs
        assert "hunter2" not in server_logs
        assert "verbose" in server_logs

    def test_websocket_secret_not_logged(self, client: TestClient, caplog) -> None:
        created = client.post("/api/session/create").json()
        url = f"/?sessionId={created['sessionId']}&role=host&secret={created['hostSecret']}"
        with caplog.at_level(logging.INFO):
            with client.websocket_connect(url) as host:
                host.receive_json()
        relay_logs = "\n".join(r.getMessage() for r in caplog.records if not r.name.startswith("httpx"))
        assert created["sessionId"] in relay_logs
        assert created["hostSecret"] not in relay_logs
