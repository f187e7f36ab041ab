"""Tests for the HTTP and WebSocket surface of the relay server."""
import time

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from src.relay.transport import POLICY_VIOLATION
from src.server.app import create_app
from src.server.config import ServerConfig
from src.server.routes import health as health_routes
from tests.conftest import fast_relay_config


def _create(client: TestClient) -> dict:
    response = client.post("/api/session/create")
    assert response.status_code == 200
    return response.json()


def _host_url(created: dict) -> str:
    return f"/?sessionId={created['sessionId']}&role=host&secret={created['hostSecret']}"


def _guest_url(created: dict) -> str:
    return f"/?sessionId={created['sessionId']}&role=guest"


class TestCreateSession:
    def test_create_returns_ids_and_guest_url(self, client: TestClient) -> None:
        data = _create(client)
        assert set(data) == {"sessionId", "hostSecret", "guestUrl"}
        assert data["guestUrl"] == f"https://guest.example.com/join/{data['sessionId']}"
        assert data["sessionId"] == data["sessionId"].upper()

    def test_each_create_is_distinct(self, client: TestClient) -> None:
        first, second = _create(client), _create(client)
        assert first["sessionId"] != second["sessionId"]
        assert first["hostSecret"] != second["hostSecret"]


class TestSessionInfo:
    def test_fresh_session(self, client: TestClient) -> None:
        created = _create(client)
        response = client.get(f"/api/session/{created['sessionId']}")
        assert response.status_code == 200
        data = response.json()
        assert data["sessionId"] == created["sessionId"]
        assert data["hasHost"] is False
        assert data["hasGuest"] is False
        assert data["createdAt"].endswith("Z")
        assert "hostSecret" not in data

    def test_lowercase_id_resolves(self, client: TestClient) -> None:
        created = _create(client)
        response = client.get(f"/api/session/{created['sessionId'].lower()}")
        assert response.status_code == 200

    def test_unknown_session_returns_404(self, client: TestClient) -> None:
        response = client.get("/api/session/NOPE0000")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "SESSION_NOT_FOUND"
        assert error["message"] == "Session not found"

    def test_reflects_connected_peers(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(_host_url(created)) as host:
            host.receive_json()
            data = client.get(f"/api/session/{created['sessionId']}").json()
            assert data["hasHost"] is True
            assert data["hasGuest"] is False


class TestHealth:
    def test_health_counts_sessions(self, client: TestClient) -> None:
        before = client.get("/health").json()
        _create(client)
        after = client.get("/health").json()
        assert before["status"] == "ok"
        assert after["activeSessionCount"] == before["activeSessionCount"] + 1
        assert after["processUptime"] >= 0

    def test_cors_headers(self, client: TestClient) -> None:
        response = client.get("/health", headers={"Origin": "https://elsewhere.example"})
        assert response.headers["access-control-allow-origin"] == "*"


class TestRelayFlow:
    def test_host_and_guest_exchange_messages(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(_host_url(created)) as host:
            connected = host.receive_json()
            assert connected["type"] == "connected"
            assert connected["role"] == "host"
            assert connected["sessionId"] == created["sessionId"]

            with client.websocket_connect(_guest_url(created)) as guest:
                assert guest.receive_json()["type"] == "connected"
                joined = host.receive_json()
                assert joined["type"] == "guest_joined"
                assert joined["guestId"]

                host.send_json({"type": "message", "text": "hi"})
                relayed = guest.receive_json()
                assert relayed["type"] == "message"
                assert relayed["text"] == "hi"
                assert relayed["sender"] == "host"
                assert relayed["timestamp"].endswith("Z")

                guest.send_text('{"type": "reply", "data": [1, 2]}')
                back = host.receive_json()
                assert back["sender"] == "guest"
                assert back["data"] == [1, 2]

            assert host.receive_json()["type"] == "guest_left"

    def test_ws_path_alias(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(f"/ws?sessionId={created['sessionId']}&role=guest") as guest:
            assert guest.receive_json()["type"] == "connected"

    def test_client_id_alias_for_secret(self, client: TestClient) -> None:
        created = _create(client)
        url = f"/?sessionId={created['sessionId']}&role=host&clientId={created['hostSecret']}"
        with client.websocket_connect(url) as host:
            assert host.receive_json()["role"] == "host"

    def test_binary_frame_is_relayed(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(_host_url(created)) as host:
            host.receive_json()
            with client.websocket_connect(_guest_url(created)) as guest:
                guest.receive_json()
                host.receive_json()
                guest.send_bytes(b'{"type": "blob"}')
                assert host.receive_json()["type"] == "blob"

    def test_malformed_message_keeps_connection_open(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(_host_url(created)) as host:
            host.receive_json()
            with client.websocket_connect(_guest_url(created)) as guest:
                guest.receive_json()
                host.receive_json()
                host.send_text("not json at all")
                host.send_text('["array"]')
                host.send_json({"no_type": True})
                host.send_json({"type": "after"})
                assert guest.receive_json()["type"] == "after"

    def test_host_leaving_notifies_guest(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(_guest_url(created)) as guest:
            guest.receive_json()
            with client.websocket_connect(_host_url(created)) as host:
                host.receive_json()
            assert guest.receive_json()["type"] == "host_left"


class TestRejections:
    @pytest.mark.parametrize(
        "query,reason",
        [
            ("/?role=host", "Missing sessionId or role"),
            ("/?sessionId=ABC12345", "Missing sessionId or role"),
            ("/?sessionId=NOPE0000&role=guest", "Session not found"),
        ],
    )
    def test_rejected_with_policy_violation(self, client: TestClient, query: str, reason: str) -> None:
        with client.websocket_connect(query) as ws:
            with pytest.raises(WebSocketDisconnect) as exc:
                ws.receive_json()
        assert exc.value.code == POLICY_VIOLATION
        assert exc.value.reason == reason

    def test_invalid_role(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(f"/?sessionId={created['sessionId']}&role=admin") as ws:
            with pytest.raises(WebSocketDisconnect) as exc:
                ws.receive_json()
        assert exc.value.code == POLICY_VIOLATION
        assert exc.value.reason == "Invalid role"

    def test_wrong_host_secret(self, client: TestClient) -> None:
        created = _create(client)
        url = f"/?sessionId={created['sessionId']}&role=host&secret=wrong"
        with client.websocket_connect(url) as ws:
            with pytest.raises(WebSocketDisconnect) as exc:
                ws.receive_json()
        assert exc.value.code == POLICY_VIOLATION
        assert exc.value.reason == "Invalid host secret"
        info = client.get(f"/api/session/{created['sessionId']}").json()
        assert info["hasHost"] is False


class TestEmptySessionGrace:
    def test_session_removed_after_last_peer_leaves(self, client: TestClient) -> None:
        created = _create(client)
        with client.websocket_connect(_host_url(created)) as host:
            host.receive_json()
        time.sleep(0.3)
        response = client.get(f"/api/session/{created['sessionId']}")
        assert response.status_code == 404

    def test_reconnect_within_grace(self) -> None:
        config = ServerConfig(relay=fast_relay_config(empty_session_grace_seconds=0.5))
        with TestClient(create_app(config)) as client:
            created = _create(client)
            with client.websocket_connect(_host_url(created)) as host:
                host.receive_json()
            with client.websocket_connect(_host_url(created)) as host:
                assert host.receive_json()["type"] == "connected"
                time.sleep(0.7)
                assert client.get(f"/api/session/{created['sessionId']}").status_code == 200


class TestUptime:
    def test_uptime_counts_from_server_start(self, client: TestClient, monkeypatch) -> None:
        monkeypatch.setattr(health_routes, "MODULE_LOADED_AT", health_routes.MODULE_LOADED_AT - 120)
        assert client.get("/health").json()["processUptime"] >= 120
