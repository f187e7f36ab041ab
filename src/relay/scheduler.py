"""Scheduled background tasks with deterministic cancellation.

Every timer the relay uses (liveness probes, empty-session reapers,
the idle sweep) is created through a TaskScheduler so that shutdown
can cancel and await all of them, and so that a task tied to a
connection can be cancelled the moment the connection goes away.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

TaskBody = Callable[[], Awaitable[Optional[bool]]]


class ScheduledTask:
    """Handle to a one-shot or recurring task."""

    def __init__(self, name: str, task: "asyncio.Task[None]") -> None:
        self._name = name
        self._task = task

    @property
    def name(self) -> str:
        return self._name

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> None:
        if not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait for the task to finish, treating cancellation as completion."""
        try:
            await self._task
        except asyncio.CancelledError:
            pass


class TaskScheduler:
    """Creates and tracks asyncio tasks for delayed and periodic work.

    Must be used from inside a running event loop.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    def call_later(self, delay: float, func: TaskBody, name: str = "call_later") -> ScheduledTask:
        """Run ``await func()`` once, *delay* seconds from now."""

        async def _run() -> None:
            await asyncio.sleep(delay)
            await self._invoke(name, func)

        return self._spawn(_run(), name)

    def call_every(self, interval: float, func: TaskBody, name: str = "call_every") -> ScheduledTask:
        """Run ``await func()`` every *interval* seconds.

        The first run happens one interval from now. The task stops when
        cancelled or when *func* returns False.
        """

        async def _run() -> None:
            while True:
                await asyncio.sleep(interval)
                if await self._invoke(name, func) is False:
                    logger.debug("Recurring task %s stopped itself", name)
                    return

        return self._spawn(_run(), name)

    async def shutdown(self) -> None:
        """Cancel every outstanding task and wait for them to unwind."""
        tasks = [task for task in self._tasks if not task.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Scheduler stopped, cancelled %d task(s)", len(tasks))

    def _spawn(self, coro: Awaitable[None], name: str) -> ScheduledTask:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return ScheduledTask(name, task)

    @staticmethod
    async def _invoke(name: str, func: TaskBody) -> Optional[bool]:
        try:
            return await func()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Scheduled task %s failed", name)
            return None
