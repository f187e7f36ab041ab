"""Periodic liveness probing of bound transports."""
import logging

from src.relay.scheduler import ScheduledTask, TaskScheduler
from src.relay.session import Session
from src.relay.transport import Transport

logger = logging.getLogger(__name__)


class LivenessMonitor:
    """Probes each bound transport at a fixed interval.

    A successful probe counts as session activity. The probe task ends
    itself once the transport is no longer live, so nothing outlives
    the connection it was watching.

    WebSocket transports cannot send ping frames from an ASGI app, so
    their probe only reports that the socket is open. Detecting a peer
    that stopped answering relies on the server keepalive (uvicorn
    ``ws_ping_interval``/``ws_ping_timeout``), which closes the socket
    and ends the probe.
    """

    def __init__(self, scheduler: TaskScheduler, interval_seconds: float) -> None:
        self._scheduler = scheduler
        self._interval = interval_seconds

    def watch(self, session: Session, transport: Transport, label: str = "") -> ScheduledTask:
        name = f"probe:{session.session_id}:{label}" if label else f"probe:{session.session_id}"

        async def _probe() -> bool:
            if not transport.is_live:
                return False
            if await transport.ping():
                session.touch()
                return True
            logger.debug("Probe unanswered for %s", name)
            return transport.is_live

        return self._scheduler.call_every(self._interval, _probe, name=name)
