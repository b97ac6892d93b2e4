"""Canonical artifact management.

Owns the per-category output channel and the single summary message living
in it. Nothing else writes to either.
"""

import asyncio
import logging

from threadlist.models.activity import SummaryArtifact
from threadlist.models.discord import CategoryRef, ChannelKind, ChannelRef, MessageRef
from threadlist.services.protocols import ChatPlatformProtocol
from threadlist.utils.errors import ArtifactChannelError, ArtifactMessageError

logger = logging.getLogger(__name__)


class CanonicalArtifactManager:
    """Keeps exactly one output channel and one summary message per category."""

    def __init__(
        self,
        platform: ChatPlatformProtocol,
        channel_name: str = "thread-list",
        placeholder: str = "Active Threads:",
    ):
        self.platform = platform
        self.channel_name = channel_name
        self.placeholder = placeholder

    async def ensure_channel(self, category: CategoryRef) -> ChannelRef:
        """
        Return the category's output channel, creating it if absent.

        Raises:
            ArtifactChannelError: If the channel can be neither found nor created
        """
        try:
            children = await self.platform.list_category_channels(category.id)
        except Exception as e:
            raise ArtifactChannelError(
                category.id, f"could not list channels: {e}"
            ) from e

        for channel in children:
            if channel.name == self.channel_name and channel.kind is ChannelKind.TEXT:
                return channel

        try:
            channel = await self.platform.create_restricted_text_channel(
                category.id, self.channel_name
            )
        except Exception as e:
            raise ArtifactChannelError(
                category.id, f"could not create #{self.channel_name}: {e}"
            ) from e

        logger.info(
            f"Created #{self.channel_name} in {category.name} ({category.id})",
            extra={"category_id": category.id, "channel_id": channel.id},
        )
        return channel

    async def ensure_message(self, channel: ChannelRef) -> MessageRef:
        """
        Return the canonical summary message, deleting every other message.

        The newest message authored by the aggregator is canonical; a
        placeholder is sent when there is none. Stray deletions are
        independent: one failing is logged and the rest still run.

        Raises:
            ArtifactMessageError: If messages cannot be listed or sent
        """
        self_id = self.platform.self_id
        if self_id is None:
            raise ArtifactMessageError(channel.id, "own user id is not known yet")

        try:
            messages = await self.platform.fetch_messages(channel.id, limit=None)
        except Exception as e:
            raise ArtifactMessageError(
                channel.id, f"could not fetch messages: {e}"
            ) from e

        canonical = next((m for m in messages if m.author_id == self_id), None)
        if canonical is None:
            try:
                canonical = await self.platform.send_message(
                    channel.id, self.placeholder
                )
            except Exception as e:
                raise ArtifactMessageError(
                    channel.id, f"could not send summary message: {e}"
                ) from e
            logger.info(
                f"Sent new summary message {canonical.id} to #{channel.name}",
                extra={"channel_id": channel.id},
            )

        strays = [m for m in messages if m.id != canonical.id]
        if strays:
            await asyncio.gather(*(self._delete_stray(m) for m in strays))

        return canonical

    async def _delete_stray(self, message: MessageRef) -> None:
        try:
            await self.platform.delete_message(message.channel_id, message.id)
            logger.debug(f"Deleted stray message {message.id}")
        except Exception as e:
            logger.warning(
                f"Attempted to delete message '{message.id}' from channel but encountered {e}",
                extra={"channel_id": message.channel_id},
            )

    async def publish(self, message: MessageRef, artifact: SummaryArtifact) -> None:
        """
        Overwrite the canonical message with the rendered artifact.

        Raises:
            ArtifactMessageError: If the edit fails
        """
        try:
            await self.platform.edit_message(message.channel_id, message.id, artifact)
        except Exception as e:
            raise ArtifactMessageError(
                message.channel_id, f"could not edit summary message: {e}"
            ) from e
