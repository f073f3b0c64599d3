"""
Fire-and-forget notification dispatch.

Handlers hand email sends to the dispatcher once their upstream call has
succeeded. Each send runs as its own asyncio task: the request never awaits
it, failures are logged and discarded, and nothing is retried.

The dispatcher keeps a strong reference to every running task (the event
loop only holds weak ones) so sends are not garbage-collected mid-flight,
and exposes drain() for shutdown.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Starts best-effort notification tasks and tracks them until done."""

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of sends still running."""
        return len(self._tasks)

    def dispatch(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> Optional[asyncio.Task]:
        """
        Start `func(*args, **kwargs)` in the background.

        Never raises into the caller. Must be called from a running event
        loop (i.e. from an async request handler).

        Returns:
            The task, or None if the send could not be started
        """
        name = getattr(func, "__name__", repr(func))
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Notification {name} failed to start: {e}")
            return None

        if not inspect.isawaitable(result):
            logger.debug(f"Notification {name} completed synchronously")
            return None

        task = asyncio.ensure_future(self._run(name, result))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, name: str, awaitable: Awaitable[Any]) -> None:
        try:
            await awaitable
        except Exception as e:
            logger.error(f"Notification {name} failed: {e}")
            return
        logger.debug(f"Notification {name} finished")

    async def drain(self, timeout: float = 5.0) -> int:
        """
        Wait for outstanding sends without cancelling them.

        Returns:
            Number of sends still running when the timeout expired
        """
        if not self._tasks:
            return 0
        logger.info(f"Waiting up to {timeout}s for {len(self._tasks)} notification(s)")
        _, still_running = await asyncio.wait(set(self._tasks), timeout=timeout)
        if still_running:
            logger.warning(f"{len(still_running)} notification(s) still running at shutdown")
        return len(still_running)
