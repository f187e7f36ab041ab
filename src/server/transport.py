"""Adapter from a Starlette WebSocket to the relay Transport interface."""
import json
import logging
from typing import Any

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from src.relay.transport import NORMAL_CLOSURE, TransportClosedError

logger = logging.getLogger(__name__)


class WebSocketTransport:
    """Relay transport backed by an accepted ASGI WebSocket.

    ASGI does not expose ping/pong control frames to the application.
    The server's own keepalive (uvicorn ``ws_ping_interval``) drops
    peers that stop answering, so a probe here succeeds while the
    connection is still open.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket
        self._closed = False

    @property
    def is_live(self) -> bool:
        return (
            not self._closed
            and self._websocket.application_state == WebSocketState.CONNECTED
            and self._websocket.client_state == WebSocketState.CONNECTED
        )

    async def send_json(self, data: dict[str, Any]) -> None:
        if not self.is_live:
            raise TransportClosedError("WebSocket is closed")
        try:
            await self._websocket.send_text(json.dumps(data))
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            self._closed = True
            raise TransportClosedError(f"WebSocket send failed: {exc}") from exc

    async def close(self, code: int = NORMAL_CLOSURE, reason: str = "") -> None:
        if self._closed or self._websocket.application_state != WebSocketState.CONNECTED:
            self._closed = True
            return
        self._closed = True
        try:
            await self._websocket.close(code=code, reason=reason)
        except (RuntimeError, OSError) as exc:
            raise TransportClosedError(f"WebSocket close failed: {exc}") from exc

    async def ping(self) -> bool:
        return self.is_live

    def mark_closed(self) -> None:
        """Record that the peer disconnected."""
        self._closed = True
