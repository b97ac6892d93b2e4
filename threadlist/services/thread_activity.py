"""Resolve the most recent activity of every thread in a category."""

import asyncio
import logging

from threadlist.models.activity import ThreadActivity
from threadlist.models.discord import CategoryRef, ThreadRef
from threadlist.services.protocols import ChatPlatformProtocol

logger = logging.getLogger(__name__)


class ThreadActivityResolver:
    """Probes each thread's newest message to derive its last-active instant."""

    def __init__(self, platform: ChatPlatformProtocol, max_concurrency: int = 10):
        """
        Args:
            platform: Chat platform used for thread listing and message probes
            max_concurrency: Upper bound on probes in flight at once
        """
        self.platform = platform
        self._semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def resolve(self, category: CategoryRef) -> list[ThreadActivity]:
        """
        List the category's threads with their last activity, newest first.

        Threads without a fetchable message are left out. A failed probe drops
        only that thread.
        """
        threads = await self.platform.list_threads(category.id)
        logger.debug(
            f"Resolving activity for {len(threads)} threads in {category.name}",
            extra={"category_id": category.id},
        )

        results = await asyncio.gather(*(self._probe(thread) for thread in threads))

        activities = [activity for activity in results if activity is not None]
        # sort() is stable, ties keep listing order
        activities.sort(key=lambda activity: activity.last_active, reverse=True)
        return activities

    async def _probe(self, thread: ThreadRef) -> ThreadActivity | None:
        async with self._semaphore:
            try:
                message = await self.platform.fetch_latest_message(thread.id)
            except Exception as e:
                logger.warning(
                    f"Could not fetch latest message of thread {thread.name} ({thread.id}): {e}",
                    extra={"thread_id": thread.id},
                )
                return None

        if message is None:
            logger.debug(f"Thread {thread.id} has no messages, skipping")
            return None
        return ThreadActivity(thread=thread, last_active=message.created_at)
