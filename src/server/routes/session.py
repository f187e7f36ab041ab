"""Session creation and lookup endpoints."""
import logging
from fastapi import APIRouter, status
from src.relay.events import format_timestamp
from src.relay.hub import RelayHub
from src.relay.session import Role
from src.server.config import ServerConfig
from src.server.errors import UnknownSessionError
from src.server.models.responses import CreateSessionResponse, ErrorResponse, SessionInfoResponse

logger = logging.getLogger(__name__)


def create_session_router(config: ServerConfig, hub: RelayHub) -> APIRouter:
    """Create session router with injected dependencies."""
    router = APIRouter()

    @router.post("/api/session/create", response_model=CreateSessionResponse, status_code=status.HTTP_200_OK, tags=["sessions"])
    async def create_session() -> CreateSessionResponse:
        """Create a session and return the host's credentials and the guest link."""
        session = hub.registry.create()
        return CreateSessionResponse(
            session_id=session.session_id,
            host_secret=session.host_secret,
            guest_url=f"{config.guest_url}/join/{session.session_id}",
        )

    @router.get(
        "/api/session/{session_id}",
        response_model=SessionInfoResponse,
        status_code=status.HTTP_200_OK,
        responses={404: {"model": ErrorResponse}},
        tags=["sessions"],
    )
    async def get_session(session_id: str) -> SessionInfoResponse:
        """Report which roles are connected. Does not count as session activity."""
        session = hub.registry.get(session_id)
        if session is None:
            raise UnknownSessionError(session_id)
        return SessionInfoResponse(
            session_id=session.session_id,
            has_host=session.live_transport(Role.HOST) is not None,
            has_guest=session.live_transport(Role.GUEST) is not None,
            created_at=format_timestamp(session.created_at),
        )

    return router
