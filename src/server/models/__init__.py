"""Pydantic models for request/response validation."""
from src.server.models.responses import (
    CamelModel,
    CreateSessionResponse,
    SessionInfoResponse,
    HealthResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "CamelModel",
    "CreateSessionResponse",
    "SessionInfoResponse",
    "HealthResponse",
    "ErrorDetail",
    "ErrorResponse",
]
