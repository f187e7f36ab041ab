"""Session registry and connection relay core."""
from src.relay.binder import Connection, ConnectionBinder
from src.relay.config import RelayConfig
from src.relay.engine import RelayEngine, RelayEnvelope, parse_frame
from src.relay.errors import (
    BindRejectedError,
    InvalidHostSecretError,
    InvalidRoleError,
    MalformedMessageError,
    MissingParametersError,
    RelayError,
    SessionNotFoundError,
)
from src.relay.events import ControlEvent, format_timestamp
from src.relay.hub import RelayHub
from src.relay.liveness import LivenessMonitor
from src.relay.registry import SessionRegistry
from src.relay.scheduler import ScheduledTask, TaskScheduler
from src.relay.session import Bound, Role, Session, Unbound
from src.relay.sweeper import LifecycleSweeper
from src.relay.transport import Transport, TransportClosedError

__all__ = ["Connection", "ConnectionBinder", "RelayConfig", "RelayEngine", "RelayEnvelope", "parse_frame",
           "BindRejectedError", "InvalidHostSecretError", "InvalidRoleError", "MalformedMessageError",
           "MissingParametersError", "RelayError", "SessionNotFoundError", "ControlEvent", "format_timestamp",
           "LivenessMonitor", "SessionRegistry", "ScheduledTask", "TaskScheduler",
           "Bound", "Role", "Session", "Unbound", "LifecycleSweeper", "Transport", "TransportClosedError",
           "RelayHub"]
