"""Relay timing and policy configuration."""
from dataclasses import dataclass

EMPTY_SESSION_GRACE_SECONDS = 5 * 60
IDLE_TIMEOUT_SECONDS = 30 * 60
IDLE_SWEEP_INTERVAL_SECONDS = 10 * 60
LIVENESS_INTERVAL_SECONDS = 30


@dataclass(frozen=True)
class RelayConfig:
    """Timers and rebind policy for the relay core.

    ``empty_session_grace_seconds``: how long a session with no bound
        transports survives before it is removed.
    ``idle_timeout_seconds``: maximum age of ``last_activity`` before the
        idle sweep evicts a session, bound or not.
    ``idle_sweep_interval_seconds``: how often the idle sweep runs.
    ``liveness_interval_seconds``: probe interval for bound transports.
    ``close_superseded``: close the previous transport when a role is
        bound again while its old connection is still open.
    """

    empty_session_grace_seconds: float = EMPTY_SESSION_GRACE_SECONDS
    idle_timeout_seconds: float = IDLE_TIMEOUT_SECONDS
    idle_sweep_interval_seconds: float = IDLE_SWEEP_INTERVAL_SECONDS
    liveness_interval_seconds: float = LIVENESS_INTERVAL_SECONDS
    close_superseded: bool = True

    def __post_init__(self) -> None:
        for name in (
            "empty_session_grace_seconds",
            "idle_timeout_seconds",
            "idle_sweep_interval_seconds",
            "liveness_interval_seconds",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
