"""FastAPI application factory."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from src.relay.hub import RelayHub
from src.server.config import ServerConfig, load_config_from_env
from src.server.errors import RelayServiceError
from src.server.middleware.logging import RequestLoggingMiddleware
from src.server.models.responses import ErrorResponse, ErrorDetail
from src.server.routes.session import create_session_router
from src.server.routes.health import create_health_router
from src.server.routes.relay import create_relay_router

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


def create_app(config: Optional[ServerConfig] = None, hub: Optional[RelayHub] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    When called without arguments (e.g. via uvicorn --factory), loads
    configuration from environment variables.
    """
    if config is None:
        config = load_config_from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if hub is None:
        hub = RelayHub(config.relay)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await hub.start()
        logger.info("Guest URL: %s", config.guest_url)
        yield
        await hub.stop()

    app = FastAPI(
        title="Duplex Relay",
        description="Pairs a host and a guest under a session id and relays messages between them",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.hub = hub
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RelayServiceError, _service_error_handler)
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.include_router(create_session_router(config, hub))
    app.include_router(create_health_router(hub))
    app.include_router(create_relay_router(hub))
    return app


async def _service_error_handler(request: Request, exc: RelayServiceError) -> JSONResponse:
    response = ErrorResponse(error=ErrorDetail(code=exc.error_code, message=exc.message, details=exc.details))
    return JSONResponse(status_code=exc.status_code, content=response.model_dump())


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    response = ErrorResponse(error=ErrorDetail(code="INVALID_FORMAT", message="Request validation failed", details={"validation_errors": exc.errors(include_url=False, include_context=False)}))
    return JSONResponse(status_code=400, content=response.model_dump())
