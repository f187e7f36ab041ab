"""Time-based reclamation of abandoned and idle sessions."""
import logging
from datetime import datetime
from typing import Optional

from src.relay.config import RelayConfig
from src.relay.registry import SessionRegistry
from src.relay.scheduler import ScheduledTask, TaskScheduler
from src.relay.session import Session
from src.relay.transport import NORMAL_CLOSURE, TransportClosedError

logger = logging.getLogger(__name__)

IDLE_CLOSE_REASON = "Session timed out"


class LifecycleSweeper:
    """Removes sessions nobody is using any more.

    Two mechanisms run side by side:

    * an empty-session reaper, scheduled per session when its last
      binding goes away, which deletes the session after the grace
      period if it is still empty at that moment;
    * a recurring idle sweep that evicts every session whose last
      activity is older than the idle timeout, closing its transports
      first.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        scheduler: TaskScheduler,
        config: RelayConfig,
    ) -> None:
        self._registry = registry
        self._scheduler = scheduler
        self._config = config
        self._sweep_task: Optional[ScheduledTask] = None
        self._reapers: dict[str, ScheduledTask] = {}

    @property
    def running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done

    def start(self) -> None:
        if self.running:
            return
        self._sweep_task = self._scheduler.call_every(
            self._config.idle_sweep_interval_seconds, self._sweep_tick, name="idle-sweep",
        )
        logger.info(
            "Idle sweep every %.0fs, idle timeout %.0fs",
            self._config.idle_sweep_interval_seconds, self._config.idle_timeout_seconds,
        )

    def stop(self) -> None:
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            self._sweep_task = None
        for reaper in self._reapers.values():
            reaper.cancel()
        self._reapers.clear()

    def schedule_empty_check(self, session: Session) -> ScheduledTask:
        """Delete *session* after the grace period if it is still empty then."""
        session_id = session.session_id
        previous = self._reapers.pop(session_id, None)
        if previous is not None:
            previous.cancel()

        async def _reap() -> None:
            if self._reapers.get(session_id) is task:
                del self._reapers[session_id]
            if self._registry.delete_if(session, lambda s: s.is_empty):
                logger.info("Session %s cleaned up", session_id)
            else:
                logger.debug("Session %s kept, peer reconnected or already removed", session_id)

        task = self._scheduler.call_later(
            self._config.empty_session_grace_seconds, _reap, name=f"reap:{session_id}",
        )
        self._reapers[session_id] = task
        return task

    async def sweep_idle(self, now: Optional[datetime] = None) -> list[str]:
        """Evict sessions idle past the timeout. Returns the evicted ids."""
        timeout = self._config.idle_timeout_seconds
        expired = [s for s in self._registry.sessions() if s.idle_seconds(now) > timeout]
        evicted = []
        for session in expired:
            # Unregister before awaiting so no bind can land on an evicted session.
            if not self._registry.delete_if(session, lambda s: s.idle_seconds(now) > timeout):
                continue
            evicted.append(session.session_id)
            logger.info("Session %s timed out", session.session_id)
            for transport in session.bound_transports():
                try:
                    await transport.close(NORMAL_CLOSURE, IDLE_CLOSE_REASON)
                except TransportClosedError:
                    logger.debug("Transport already closed in session %s", session.session_id)
        return evicted

    async def _sweep_tick(self) -> None:
        await self.sweep_idle()
