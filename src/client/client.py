"""RelayClient: HTTP access to a relay server's session API."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx

from .exceptions import UnexpectedResponseError
from .transport import Transport


class RelayClient:
    """Client for the relay request/response surface. Must be used as async context manager."""

    def __init__(self, base_url: str, timeout: float = 10.0, max_retries: int = 3,
                 transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = Transport(base_url, timeout, max_retries, transport=transport)

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    async def __aenter__(self) -> "RelayClient":
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        await self._transport.__aexit__(*args)

    async def create_session(self) -> dict[str, Any]:
        """Create a session; returns ``sessionId``, ``hostSecret`` and ``guestUrl``."""
        status, body = await self._transport.post("/api/session/create")
        return _expect(status, body, "create session")

    async def get_session(self, session_id: str) -> dict[str, Any] | None:
        """Fetch session info, or None when the session does not exist."""
        status, body = await self._transport.get(f"/api/session/{session_id}")
        if status == 404:
            return None
        return _expect(status, body, "get session")

    async def health(self) -> dict[str, Any]:
        status, body = await self._transport.get("/health")
        return _expect(status, body, "health check")

    def websocket_url(self, session_id: str, role: str, secret: str | None = None) -> str:
        """Build the URL a peer opens to attach to *session_id* as *role*."""
        parts = urlsplit(self.base_url)
        scheme = "wss" if parts.scheme == "https" else "ws"
        query = {"sessionId": session_id, "role": role}
        if secret:
            query["secret"] = secret
        return urlunsplit((scheme, parts.netloc, parts.path.rstrip("/") + "/", urlencode(query), ""))


def _expect(status: int, body: dict | None, action: str) -> dict[str, Any]:
    if status != 200 or body is None:
        message = body.get("error", {}).get("message", body) if body else "empty response"
        raise UnexpectedResponseError(f"Failed to {action}: {message}", status)
    return body
