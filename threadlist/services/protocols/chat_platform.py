"""
Chat Platform Protocol

Defines the outbound calls the aggregation engine makes against the chat
platform. Every method that talks to the network is a suspension point.
"""

from typing import Protocol, runtime_checkable

from threadlist.models.activity import SummaryArtifact
from threadlist.models.discord import CategoryRef, ChannelRef, MessageRef, ThreadRef


@runtime_checkable
class ChatPlatformProtocol(Protocol):
    """Protocol for chat platform implementations."""

    @property
    def self_id(self) -> int | None:
        """User id of the aggregator's own identity, once known."""
        ...

    async def list_categories(self) -> list[CategoryRef]:
        """List every category visible to the aggregator."""
        ...

    async def get_category(self, category_id: int) -> CategoryRef | None:
        """Look up one category by id."""
        ...

    async def list_category_channels(self, category_id: int) -> list[ChannelRef]:
        """List the child channels of a category, in display order."""
        ...

    async def list_threads(self, category_id: int) -> list[ThreadRef]:
        """
        List threads whose parent channel belongs to the category.

        Args:
            category_id: Category to enumerate

        Returns:
            Threads, in no particular order
        """
        ...

    async def fetch_latest_message(self, thread_id: int) -> MessageRef | None:
        """
        Fetch the single most recent message of a thread.

        Returns:
            The message, or None when the thread has none
        """
        ...

    async def fetch_messages(
        self, channel_id: int, limit: int | None = None
    ) -> list[MessageRef]:
        """
        Fetch channel messages, newest first.

        Args:
            channel_id: Channel to read
            limit: Maximum number of messages, None for all of them
        """
        ...

    async def create_restricted_text_channel(
        self, category_id: int, name: str
    ) -> ChannelRef:
        """Create a text channel only the aggregator may post in."""
        ...

    async def send_message(self, channel_id: int, content: str) -> MessageRef:
        """Send a plain-text message."""
        ...

    async def edit_message(
        self, channel_id: int, message_id: int, artifact: SummaryArtifact
    ) -> None:
        """Replace the whole body of a message with the rendered artifact."""
        ...

    async def delete_message(self, channel_id: int, message_id: int) -> None:
        """Delete one message."""
        ...
