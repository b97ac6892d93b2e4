"""
Factories for Discord entity models used across tests
"""

from datetime import UTC, datetime, timedelta

from threadlist.models.activity import ThreadActivity
from threadlist.models.discord import (
    CategoryRef,
    ChannelKind,
    ChannelRef,
    MessageRef,
    ThreadRef,
)

BOT_ID = 4242
MEMBER_ID = 1001
GUILD_ID = 500
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class CategoryFactory:
    """Factory for creating categories"""

    @staticmethod
    def create(
        category_id: int = 10, name: str = "Projects", guild_id: int = GUILD_ID
    ) -> CategoryRef:
        return CategoryRef(id=category_id, name=name, guild_id=guild_id)

    @staticmethod
    def create_ignored() -> CategoryRef:
        return CategoryFactory.create(category_id=99, name="Voice Channels")


class ChannelFactory:
    """Factory for creating channels"""

    @staticmethod
    def create_text(
        channel_id: int = 200,
        name: str = "general",
        category_id: int | None = 10,
    ) -> ChannelRef:
        return ChannelRef(
            id=channel_id,
            name=name,
            kind=ChannelKind.TEXT,
            category_id=category_id,
            guild_id=GUILD_ID,
        )

    @staticmethod
    def create_thread_channel(
        channel_id: int = 300, category_id: int | None = 10
    ) -> ChannelRef:
        return ChannelRef(
            id=channel_id,
            name=f"thread-{channel_id}",
            kind=ChannelKind.THREAD,
            category_id=category_id,
            guild_id=GUILD_ID,
        )


class ThreadFactory:
    """Factory for creating threads"""

    @staticmethod
    def create(
        thread_id: int = 300,
        category_id: int | None = 10,
        parent_id: int = 200,
        name: str | None = None,
    ) -> ThreadRef:
        return ThreadRef(
            id=thread_id,
            name=name or f"thread-{thread_id}",
            parent_id=parent_id,
            category_id=category_id,
            owner_id=MEMBER_ID,
            guild_id=GUILD_ID,
        )


class MessageFactory:
    """Factory for creating messages"""

    @staticmethod
    def create(
        message_id: int,
        channel_id: int,
        author_id: int = MEMBER_ID,
        created_at: datetime = NOW,
    ) -> MessageRef:
        return MessageRef(
            id=message_id,
            channel_id=channel_id,
            author_id=author_id,
            created_at=created_at,
        )


class ActivityFactory:
    """Factory for thread activity entries"""

    @staticmethod
    def create(thread_id: int, age: timedelta, now: datetime = NOW) -> ThreadActivity:
        return ThreadActivity(
            thread=ThreadFactory.create(thread_id=thread_id), last_active=now - age
        )
