"""Aggregation orchestrator.

Composes resolve -> bucket -> render -> ensure channel -> ensure message ->
publish into one refresh per category, and maps triggering events onto
refreshes.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from threadlist.config.settings import ThreadListSettings
from threadlist.models.activity import SummaryArtifact
from threadlist.models.discord import (
    CategoryRef,
    ChannelKind,
    MessageCreated,
    SessionReady,
    ThreadCreated,
    TriggerEvent,
)
from threadlist.services.artifact_manager import CanonicalArtifactManager
from threadlist.services.protocols import ChatPlatformProtocol
from threadlist.services.refresh_guard import CoalescingGuard
from threadlist.services.summary_renderer import SummaryRenderer
from threadlist.services.thread_activity import ThreadActivityResolver
from threadlist.services.time_bucketer import bucket
from threadlist.utils.errors import InvalidTimestampError, ThreadListError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class AggregationOrchestrator:
    """Keeps each category's thread list up to date."""

    def __init__(
        self,
        platform: ChatPlatformProtocol,
        settings: ThreadListSettings,
        resolver: ThreadActivityResolver | None = None,
        renderer: SummaryRenderer | None = None,
        artifacts: CanonicalArtifactManager | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.platform = platform
        self.settings = settings
        self.resolver = resolver or ThreadActivityResolver(
            platform, max_concurrency=settings.max_concurrent_fetches
        )
        self.renderer = renderer or SummaryRenderer(settings.timestamp_format)
        self.artifacts = artifacts or CanonicalArtifactManager(
            platform,
            channel_name=settings.channel_name,
            placeholder=settings.placeholder,
        )
        self.clock = clock
        self._guard = CoalescingGuard()

    def is_ignored(self, category: CategoryRef) -> bool:
        return category.name in self.settings.ignored_categories

    async def build_summary(self, category: CategoryRef) -> SummaryArtifact:
        """Resolve, bucket and render the category's threads without publishing."""
        activities = await self.resolver.resolve(category)
        now = self.clock()
        bucketed = bucket(now, ((a, a.last_active) for a in activities))
        return self.renderer.render(self.settings.title, bucketed, generated_at=now)

    async def refresh(self, category: CategoryRef) -> None:
        """
        Rebuild and publish one category's thread list.

        Concurrent calls for the same category share a single in-flight run
        plus at most one follow-up. Ignored categories are skipped untouched.

        Raises:
            InvalidTimestampError: On a bucketing contract violation
        """
        if self.is_ignored(category):
            logger.debug(f"Skipping ignored category {category.name}")
            return

        await self._guard.run(category.id, lambda: self._refresh_once(category))

    async def _refresh_once(self, category: CategoryRef) -> None:
        extra = {"category_id": category.id, "guild_id": category.guild_id}

        try:
            artifact = await self.build_summary(category)
        except InvalidTimestampError:
            raise
        except Exception:
            logger.exception(
                f"Failed to build thread list for {category.name} ({category.id})",
                extra=extra,
            )
            return

        try:
            channel = await self.artifacts.ensure_channel(category)
            message = await self.artifacts.ensure_message(channel)
            await self.artifacts.publish(message, artifact)
        except ThreadListError as e:
            logger.error(
                f"Failed to publish thread list for {category.name}: {e}", extra=extra
            )
            return

        logger.info(
            f"Updated thread list for {category.name} ({category.id})", extra=extra
        )

    async def refresh_all(self, categories: list[CategoryRef] | None = None) -> None:
        """Refresh every category concurrently; failures stay per category."""
        if categories is None:
            categories = await self.platform.list_categories()

        results = await asyncio.gather(
            *(self.refresh(category) for category in categories),
            return_exceptions=True,
        )
        for category, result in zip(categories, results, strict=True):
            if isinstance(result, BaseException):
                logger.error(
                    f"Refresh of {category.name} ({category.id}) failed",
                    exc_info=result,
                    extra={"category_id": category.id},
                )

    async def handle(self, event: TriggerEvent) -> None:
        """
        React to one triggering event. Never raises.

        - session ready: refresh every category once
        - message in a thread: refresh that thread's category
        - thread created: observed only, its first message triggers the refresh
        """
        try:
            if isinstance(event, SessionReady):
                await self.refresh_all(list(event.categories))
            elif isinstance(event, MessageCreated):
                await self._on_message(event)
            elif isinstance(event, ThreadCreated):
                logger.info(
                    f"Thread created: {event.thread.name} ({event.thread.id})",
                    extra={"thread_id": event.thread.id},
                )
        except Exception:
            logger.exception(f"Error handling {event.type} event")

    async def _on_message(self, event: MessageCreated) -> None:
        channel = event.channel
        if channel.kind is not ChannelKind.THREAD or channel.category_id is None:
            return
        if event.author_id is not None and event.author_id == self.platform.self_id:
            return

        category = await self.platform.get_category(channel.category_id)
        if category is None:
            logger.warning(
                f"Category {channel.category_id} of thread {channel.id} not found"
            )
            return
        await self.refresh(category)
