"""Response models for API endpoints."""
from typing import Annotated, Literal, Optional, Any
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialises field names as camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateSessionResponse(CamelModel):
    session_id: Annotated[str, Field()]
    host_secret: Annotated[str, Field()]
    guest_url: Annotated[str, Field()]


class SessionInfoResponse(CamelModel):
    session_id: Annotated[str, Field()]
    has_host: Annotated[bool, Field()]
    has_guest: Annotated[bool, Field()]
    created_at: Annotated[str, Field()]


class HealthResponse(CamelModel):
    status: Literal["ok"] = "ok"
    active_session_count: Annotated[int, Field(ge=0)]
    process_uptime: Annotated[float, Field(ge=0, description="Seconds since process start")]


class ErrorDetail(BaseModel):
    code: Annotated[
        Literal[
            "INVALID_FORMAT",
            "SESSION_NOT_FOUND",
            "INTERNAL_ERROR",
        ],
        Field(),
    ]
    message: Annotated[str, Field()]
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    error: ErrorDetail
