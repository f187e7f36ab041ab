"""Wiring of the relay components for one process."""
import logging
from typing import Optional

from src.relay.binder import ConnectionBinder
from src.relay.config import RelayConfig
from src.relay.engine import RelayEngine
from src.relay.liveness import LivenessMonitor
from src.relay.registry import SessionRegistry
from src.relay.scheduler import TaskScheduler
from src.relay.sweeper import LifecycleSweeper

logger = logging.getLogger(__name__)


class RelayHub:
    """Owns the registry and the components that share it.

    ``start()`` and ``stop()`` must run inside the event loop that
    serves the connections.
    """

    def __init__(
        self,
        config: Optional[RelayConfig] = None,
        registry: Optional[SessionRegistry] = None,
    ) -> None:
        self.config = config or RelayConfig()
        self.registry = registry or SessionRegistry()
        self.scheduler = TaskScheduler()
        self.sweeper = LifecycleSweeper(self.registry, self.scheduler, self.config)
        self.liveness = LivenessMonitor(self.scheduler, self.config.liveness_interval_seconds)
        self.binder = ConnectionBinder(self.registry, self.sweeper, self.liveness, self.config)
        self.engine = RelayEngine()

    async def start(self) -> None:
        self.sweeper.start()
        logger.info("Relay started")

    async def stop(self) -> None:
        self.sweeper.stop()
        await self.scheduler.shutdown()
        logger.info("Relay stopped with %d live session(s)", self.registry.snapshot())
