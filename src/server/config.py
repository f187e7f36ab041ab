"""Server configuration."""
import logging
from dataclasses import dataclass, field
import os

from src.relay.config import (
    EMPTY_SESSION_GRACE_SECONDS,
    IDLE_SWEEP_INTERVAL_SECONDS,
    IDLE_TIMEOUT_SECONDS,
    LIVENESS_INTERVAL_SECONDS,
    RelayConfig,
)

logger = logging.getLogger(__name__)

_RECOGNISED_BOOL_VALUES = frozenset(
    ("1", "true", "yes", "0", "false", "no")
)
_LOG_LEVELS = frozenset(("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))


@dataclass(frozen=True)
class ServerConfig:
    """HTTP/WebSocket surface configuration.

    ``guest_url``: base URL of the guest web app; session creation
        returns ``{guest_url}/join/{sessionId}``.
    ``cors_origins``: origins allowed by the CORS middleware.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    guest_url: str = "http://localhost:3001"
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    relay: RelayConfig = field(default_factory=RelayConfig)


def _parse_bool(value: str, default: bool) -> bool:
    """Parse a boolean environment variable with explicit default.

    Recognises ``true/1/yes`` and ``false/0/no`` (case-insensitive).
    Returns *default* when the value is empty or unset.
    Logs a warning and returns *default* for unrecognised values
    (e.g. typos like ``ture``).
    """
    if not value:
        return default
    normalised = value.lower()
    if normalised not in _RECOGNISED_BOOL_VALUES:
        logger.warning(
            "Unrecognised boolean value %r, using default %s. "
            "Expected one of: true/1/yes or false/0/no.",
            value,
            default,
        )
        return default
    return normalised in ("1", "true", "yes")


def _parse_number(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return float(default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _parse_origins(value: str) -> tuple[str, ...]:
    origins = tuple(o.strip() for o in value.split(",") if o.strip())
    return origins or ("*",)


def load_config_from_env() -> ServerConfig:
    port_raw = os.environ.get("PORT", "3000")
    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {port_raw!r}") from None

    log_level = os.environ.get("RELAY_LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        logger.warning("Unrecognised RELAY_LOG_LEVEL %r, using INFO", log_level)
        log_level = "INFO"

    return ServerConfig(
        host=os.environ.get("HOST", "0.0.0.0"),
        port=port,
        guest_url=os.environ.get("GUEST_URL", "http://localhost:3001").rstrip("/"),
        cors_origins=_parse_origins(os.environ.get("CORS_ORIGINS", "*")),
        log_level=log_level,
        relay=RelayConfig(
            empty_session_grace_seconds=_parse_number(
                "RELAY_EMPTY_SESSION_GRACE", EMPTY_SESSION_GRACE_SECONDS
            ),
            idle_timeout_seconds=_parse_number("RELAY_IDLE_TIMEOUT", IDLE_TIMEOUT_SECONDS),
            idle_sweep_interval_seconds=_parse_number(
                "RELAY_IDLE_SWEEP_INTERVAL", IDLE_SWEEP_INTERVAL_SECONDS
            ),
            liveness_interval_seconds=_parse_number(
                "RELAY_LIVENESS_INTERVAL", LIVENESS_INTERVAL_SECONDS
            ),
            close_superseded=_parse_bool(
                os.environ.get("RELAY_CLOSE_SUPERSEDED", ""), default=True
            ),
        ),
    )
