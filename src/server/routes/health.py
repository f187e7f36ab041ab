"""GET /health endpoint handler."""
import time
from fastapi import APIRouter, status
from src.relay.hub import RelayHub
from src.server.models.responses import HealthResponse

# Uptime is measured from when this module is imported, which the app
# factory does once at server startup.
MODULE_LOADED_AT = time.monotonic()


def create_health_router(hub: RelayHub) -> APIRouter:
    """Create health router with injected dependencies."""
    router = APIRouter()

    @router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK, tags=["status"])
    async def health_check() -> HealthResponse:
        """Check if the relay is operational."""
        return HealthResponse(
            status="ok",
            active_session_count=hub.registry.snapshot(),
            process_uptime=round(time.monotonic() - MODULE_LOADED_AT, 3),
        )

    return router
