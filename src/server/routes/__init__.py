"""Route handlers for the relay HTTP and WebSocket surface."""
from src.server.routes.session import create_session_router
from src.server.routes.health import create_health_router
from src.server.routes.relay import create_relay_router
__all__ = [
    "create_session_router",
    "create_health_router",
    "create_relay_router",
]
