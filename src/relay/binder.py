"""Attaching transports to session roles and detaching them on close."""
import logging
import secrets
from dataclasses import dataclass
from typing import Any, Callable, Optional

from src.relay.config import RelayConfig
from src.relay.errors import (
    InvalidHostSecretError,
    InvalidRoleError,
    MissingParametersError,
    SessionNotFoundError,
)
from src.relay.events import connected_event, guest_joined_event, peer_left_event
from src.relay.liveness import LivenessMonitor
from src.relay.registry import SessionRegistry, generate_secret
from src.relay.scheduler import ScheduledTask
from src.relay.session import Bound, Role, Session
from src.relay.sweeper import LifecycleSweeper
from src.relay.transport import SUPERSEDED, Transport, TransportClosedError

logger = logging.getLogger(__name__)

SUPERSEDED_REASON = "Superseded by a new connection"


@dataclass
class Connection:
    """A transport bound to one role of one session."""

    session: Session
    role: Role
    transport: Transport
    probe: Optional[ScheduledTask] = None

    @property
    def session_id(self) -> str:
        return self.session.session_id


class ConnectionBinder:
    """Validates attachment requests and maintains role bindings."""

    def __init__(
        self,
        registry: SessionRegistry,
        sweeper: LifecycleSweeper,
        liveness: LivenessMonitor,
        config: RelayConfig,
        guest_id_factory: Callable[[], str] = generate_secret,
    ) -> None:
        self._registry = registry
        self._sweeper = sweeper
        self._liveness = liveness
        self._config = config
        self._guest_id_factory = guest_id_factory

    async def bind(
        self,
        session_id: Optional[str],
        role: Optional[str],
        secret: Optional[str],
        transport: Transport,
    ) -> Connection:
        """Attach *transport* to *role* in the session.

        Args:
            session_id: Identifier returned by session creation.
            role: ``"host"`` or ``"guest"``.
            secret: Host secret; ignored for guests.
            transport: The connection being attached.

        Returns:
            The bound Connection, to be handed back to release() on close.

        Raises:
            MissingParametersError: session_id or role is empty.
            InvalidRoleError: role is neither host nor guest.
            SessionNotFoundError: No live session has this id.
            InvalidHostSecretError: A host presented the wrong secret.
        """
        if not session_id or not role:
            raise MissingParametersError()
        try:
            parsed_role = Role(role)
        except ValueError:
            raise InvalidRoleError(f"Invalid role: {role!r}") from None

        session = self._registry.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        if parsed_role is Role.HOST and not _secret_matches(secret, session.host_secret):
            raise InvalidHostSecretError(f"Invalid host secret for session {session.session_id}")

        guest_id = None
        if parsed_role is Role.GUEST:
            guest_id = session.assign_guest_id(self._guest_id_factory())

        previous = session.bind(parsed_role, transport)
        if isinstance(previous, Bound) and previous.transport is not transport:
            await self._supersede(session, parsed_role, previous.transport)
        logger.info("%s connected to session %s", parsed_role.value.capitalize(), session.session_id)

        if guest_id is not None:
            host = session.live_transport(Role.HOST)
            if host is not None:
                await self._send(host, guest_joined_event(guest_id), session)

        await self._send(transport, connected_event(parsed_role, session.session_id), session)
        connection = Connection(session=session, role=parsed_role, transport=transport)
        connection.probe = self._liveness.watch(session, transport, label=parsed_role.value)
        return connection

    async def release(self, connection: Connection) -> None:
        """Detach a closed transport and tell the peer it left."""
        if connection.probe is not None:
            connection.probe.cancel()
        session, role = connection.session, connection.role

        if not session.unbind(role, connection.transport):
            logger.debug(
                "Superseded %s connection closed for session %s", role.value, session.session_id,
            )
            return
        logger.info("%s disconnected from session %s", role.value.capitalize(), session.session_id)

        peer = session.live_transport(role.peer)
        if peer is not None:
            await self._send(peer, peer_left_event(role), session)

        if session.is_empty and self._registry.contains(session):
            self._sweeper.schedule_empty_check(session)

    async def _supersede(self, session: Session, role: Role, old: Transport) -> None:
        if not old.is_live:
            return
        if not self._config.close_superseded:
            logger.info("Replaced live %s binding in session %s", role.value, session.session_id)
            return
        logger.info("Closing superseded %s connection in session %s", role.value, session.session_id)
        try:
            await old.close(SUPERSEDED, SUPERSEDED_REASON)
        except TransportClosedError:
            logger.debug("Superseded transport already closed")

    @staticmethod
    async def _send(transport: Transport, event: dict[str, Any], session: Session) -> None:
        try:
            await transport.send_json(event)
        except TransportClosedError as exc:
            logger.info(
                "Could not deliver %s in session %s: %s", event["type"], session.session_id, exc,
            )


def _secret_matches(supplied: Optional[str], expected: str) -> bool:
    if not supplied:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))
