"""Control events generated by the relay itself.

Everything else travelling over a connection is opaque application
traffic. These four event types are the only ones the relay creates;
all of them carry a ``timestamp`` in the same format as forwarded
messages.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from src.relay.session import Role, utcnow


class ControlEvent(Enum):
    """Event types the relay generates."""

    CONNECTED = "connected"
    GUEST_JOINED = "guest_joined"
    HOST_LEFT = "host_left"
    GUEST_LEFT = "guest_left"


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment or utcnow()
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def connected_event(role: Role, session_id: str) -> dict[str, Any]:
    return {
        "type": ControlEvent.CONNECTED.value,
        "role": role.value,
        "sessionId": session_id,
        "timestamp": format_timestamp(),
    }


def guest_joined_event(guest_id: str) -> dict[str, Any]:
    return {
        "type": ControlEvent.GUEST_JOINED.value,
        "guestId": guest_id,
        "timestamp": format_timestamp(),
    }


def peer_left_event(role: Role) -> dict[str, Any]:
    """Build the notice sent to the peer of a role that disconnected."""
    action = ControlEvent.HOST_LEFT if role is Role.HOST else ControlEvent.GUEST_LEFT
    return {"type": action.value, "timestamp": format_timestamp()}


def stamp_forwarded(message: dict[str, Any], sender: Role) -> dict[str, Any]:
    """Copy *message* adding the sender role and a fresh timestamp."""
    return {**message, "sender": sender.value, "timestamp": format_timestamp()}
