"""Pytest fixtures shared by relay and server tests."""
from typing import Any, Optional

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from src.relay.config import RelayConfig
from src.relay.hub import RelayHub
from src.relay.transport import NORMAL_CLOSURE, TransportClosedError
from src.server.app import create_app
from src.server.config import ServerConfig


class FakeTransport:
    """In-memory Transport recording everything the relay does to it."""

    def __init__(self, answers_ping: bool = True) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed_with: Optional[tuple[int, str]] = None
        self.answers_ping = answers_ping
        self.fail_sends = False
        self.pings = 0
        self._live = True

    @property
    def is_live(self) -> bool:
        return self._live and self.closed_with is None

    async def send_json(self, data: dict[str, Any]) -> None:
        if not self.is_live or self.fail_sends:
            raise TransportClosedError("fake transport closed")
        self.sent.append(data)

    async def close(self, code: int = NORMAL_CLOSURE, reason: str = "") -> None:
        if self.closed_with is None:
            self.closed_with = (code, reason)

    async def ping(self) -> bool:
        self.pings += 1
        return self.is_live and self.answers_ping

    def drop(self) -> None:
        """Simulate the peer vanishing without a close handshake."""
        self._live = False

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]


def fast_relay_config(**overrides: Any) -> RelayConfig:
    values = dict(
        empty_session_grace_seconds=0.05,
        idle_timeout_seconds=60,
        idle_sweep_interval_seconds=60,
        liveness_interval_seconds=60,
    )
    values.update(overrides)
    return RelayConfig(**values)


@pytest.fixture
def relay_config() -> RelayConfig:
    return fast_relay_config()


@pytest_asyncio.fixture
async def hub(relay_config: RelayConfig):
    relay_hub = RelayHub(relay_config)
    await relay_hub.start()
    yield relay_hub
    await relay_hub.stop()


@pytest.fixture
def server_config(relay_config: RelayConfig) -> ServerConfig:
    return ServerConfig(guest_url="https://guest.example.com", relay=relay_config)


@pytest.fixture
def client(server_config: ServerConfig) -> TestClient:
    app = create_app(server_config)
    with TestClient(app) as c:
        yield c
