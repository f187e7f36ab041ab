"""Duplex transport interface the relay core talks to."""
from typing import Any, Protocol, runtime_checkable

POLICY_VIOLATION = 1008
NORMAL_CLOSURE = 1000
SUPERSEDED = 4000


class TransportClosedError(Exception):
    """A send or close was attempted on a connection that is gone."""


@runtime_checkable
class Transport(Protocol):
    """One live duplex connection to a peer.

    Implementations raise TransportClosedError from send_json when the
    underlying connection has already gone away.
    """

    @property
    def is_live(self) -> bool:
        ...

    async def send_json(self, data: dict[str, Any]) -> None:
        ...

    async def close(self, code: int = NORMAL_CLOSURE, reason: str = "") -> None:
        ...

    async def ping(self) -> bool:
        """Probe the peer; True when the connection answered."""
        ...
