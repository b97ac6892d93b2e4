"""Per-key mutual exclusion with coalescing of follow-up requests.

At most one run per key is in flight. Requests arriving while a run is in
flight collapse into a single follow-up run that starts once the current one
finishes, so the work always reflects the latest state without queueing one
run per request.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable

logger = logging.getLogger(__name__)


class CoalescingGuard:
    """Queue-of-one guard keyed by e.g. category id."""

    def __init__(self):
        self._tasks: dict[Hashable, asyncio.Task] = {}
        self._pending: set[Hashable] = set()

    def is_running(self, key: Hashable) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    async def run(self, key: Hashable, work: Callable[[], Awaitable[None]]) -> None:
        """
        Run ``work`` for ``key``, or coalesce into the run already in flight.

        Returns once the in-flight run, including any follow-up it picked up,
        has finished. Cancelling the caller does not cancel the run.
        """
        task = self._tasks.get(key)
        if task is None or task.done():
            task = asyncio.create_task(self._drain(key, work))
            self._tasks[key] = task
        else:
            self._pending.add(key)
            logger.debug(f"Run for {key} in flight, coalescing request")

        await asyncio.shield(task)

    async def _drain(self, key: Hashable, work: Callable[[], Awaitable[None]]) -> None:
        try:
            while True:
                self._pending.discard(key)
                await work()
                if key not in self._pending:
                    return
                logger.debug(f"Running coalesced follow-up for {key}")
        finally:
            self._pending.discard(key)
            if self._tasks.get(key) is asyncio.current_task():
                del self._tasks[key]
