"""Session state: roles, bindings and activity timestamps."""
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from src.relay.transport import Transport


class Role(Enum):
    """The two sides of a relay session."""

    HOST = "host"
    GUEST = "guest"

    @property
    def peer(self) -> "Role":
        return Role.GUEST if self is Role.HOST else Role.HOST


@dataclass(frozen=True)
class Unbound:
    """No transport attached to the role."""


@dataclass(frozen=True)
class Bound:
    """The role is attached to exactly one transport."""

    transport: Transport


Binding = Union[Unbound, Bound]
UNBOUND = Unbound()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class Session:
    """A pairing record for one host and at most one guest.

    Field mutations go through the methods below, which hold the
    session's own lock. None of them await, so callers may use them
    from any connection task without suspending.

    Attributes:
        session_id: Upper-case identifier shared with both peers.
        host_secret: Token the host must present when attaching.
        created_at: When the session was created.
        last_activity: Last inbound message, probe, bind or release.
        guest_id: Assigned on the first guest bind, then fixed.
    """

    session_id: str
    host_secret: str
    created_at: datetime = field(default_factory=utcnow)
    last_activity: datetime = field(default_factory=utcnow)
    guest_id: Optional[str] = None
    _bindings: dict[Role, Binding] = field(
        default_factory=lambda: {Role.HOST: UNBOUND, Role.GUEST: UNBOUND},
        repr=False,
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def binding(self, role: Role) -> Binding:
        with self._lock:
            return self._bindings[role]

    def transport(self, role: Role) -> Optional[Transport]:
        """Return the transport bound to *role*, or None when unbound."""
        binding = self.binding(role)
        if isinstance(binding, Bound):
            return binding.transport
        return None

    def live_transport(self, role: Role) -> Optional[Transport]:
        """Return the transport bound to *role* only if it is still live."""
        transport = self.transport(role)
        if transport is not None and transport.is_live:
            return transport
        return None

    def bind(self, role: Role, transport: Transport, now: Optional[datetime] = None) -> Binding:
        """Attach *transport* to *role* and return the binding it replaced."""
        with self._lock:
            previous = self._bindings[role]
            self._bindings[role] = Bound(transport)
            self.last_activity = now or utcnow()
            return previous

    def unbind(self, role: Role, transport: Transport, now: Optional[datetime] = None) -> bool:
        """Detach *transport* from *role*.

        Returns False (and changes nothing) when the role is bound to a
        different transport, e.g. after a reconnect replaced it.
        """
        with self._lock:
            current = self._bindings[role]
            if not isinstance(current, Bound) or current.transport is not transport:
                return False
            self._bindings[role] = UNBOUND
            self.last_activity = now or utcnow()
            return True

    def assign_guest_id(self, guest_id: str) -> str:
        """Set the guest id unless one was already assigned; return the id in effect."""
        with self._lock:
            if self.guest_id is None:
                self.guest_id = guest_id
            return self.guest_id

    def touch(self, now: Optional[datetime] = None) -> None:
        with self._lock:
            self.last_activity = now or utcnow()

    def idle_seconds(self, now: Optional[datetime] = None) -> float:
        with self._lock:
            return ((now or utcnow()) - self.last_activity).total_seconds()

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return all(isinstance(b, Unbound) for b in self._bindings.values())

    def bound_transports(self) -> list[Transport]:
        with self._lock:
            return [b.transport for b in self._bindings.values() if isinstance(b, Bound)]
