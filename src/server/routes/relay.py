"""WebSocket endpoint attaching peers to relay sessions."""
import logging

from fastapi import APIRouter, WebSocket

from src.relay.errors import BindRejectedError
from src.relay.hub import RelayHub
from src.relay.transport import POLICY_VIOLATION
from src.server.middleware.logging import sanitize_dict
from src.server.transport import WebSocketTransport

logger = logging.getLogger(__name__)


def create_relay_router(hub: RelayHub) -> APIRouter:
    """Create the WebSocket router with injected dependencies."""
    router = APIRouter()

    @router.websocket("/")
    @router.websocket("/ws")
    async def relay_socket(websocket: WebSocket) -> None:
        """Bind the connection to a session role, then relay frames until close.

        Query parameters: ``sessionId``, ``role`` (host|guest) and, for
        the host, ``secret`` (``clientId`` is accepted as an alias).
        """
        params = websocket.query_params
        session_id = params.get("sessionId")
        role = params.get("role")
        secret = params.get("secret") or params.get("clientId")
        logger.info("WebSocket connection: %s", sanitize_dict(dict(params)))

        await websocket.accept()
        transport = WebSocketTransport(websocket)
        try:
            connection = await hub.binder.bind(session_id, role, secret, transport)
        except BindRejectedError as exc:
            logger.warning("Rejected %s connection for session %s: %s", role, session_id, exc)
            await transport.close(POLICY_VIOLATION, exc.reason)
            return

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes")
                if raw is None:
                    continue
                await hub.engine.handle_frame(connection, raw)
        finally:
            transport.mark_closed()
            await hub.binder.release(connection)

    return router
