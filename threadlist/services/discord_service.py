import logging

import discord

from threadlist.models.activity import SummaryArtifact
from threadlist.models.discord import (
    CategoryRef,
    ChannelKind,
    ChannelRef,
    MessageRef,
    ThreadRef,
)

logger = logging.getLogger(__name__)

# Discord rejects embed field values longer than this
EMBED_FIELD_LIMIT = 1024

_CHANNEL_KINDS: dict[discord.ChannelType, ChannelKind] = {
    discord.ChannelType.category: ChannelKind.CATEGORY,
    discord.ChannelType.text: ChannelKind.TEXT,
    discord.ChannelType.news: ChannelKind.TEXT,
    discord.ChannelType.public_thread: ChannelKind.THREAD,
    discord.ChannelType.private_thread: ChannelKind.THREAD,
    discord.ChannelType.news_thread: ChannelKind.THREAD,
    discord.ChannelType.forum: ChannelKind.FORUM,
    discord.ChannelType.voice: ChannelKind.VOICE,
    discord.ChannelType.stage_voice: ChannelKind.VOICE,
}


def classify_channel(channel) -> ChannelKind:
    """Map a discord.py channel onto the closed ChannelKind set"""
    return _CHANNEL_KINDS.get(getattr(channel, "type", None), ChannelKind.OTHER)


def truncate_field(value: str, limit: int = EMBED_FIELD_LIMIT) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 1] + "…"


def to_embed(artifact: SummaryArtifact) -> discord.Embed:
    embed = discord.Embed(title=artifact.title, timestamp=artifact.generated_at)
    for section in artifact.sections:
        embed.add_field(
            name=section.name, value=truncate_field(section.value), inline=False
        )
    return embed


class DiscordService:
    """Service for interacting with the Discord API"""

    def __init__(self, client: discord.Client):
        self.client = client

    @property
    def self_id(self) -> int | None:
        user = self.client.user
        return user.id if user else None

    # Conversions from discord.py objects

    def to_category_ref(self, category) -> CategoryRef:
        return CategoryRef(
            id=category.id,
            name=category.name,
            guild_id=category.guild.id if category.guild else None,
        )

    def to_channel_ref(self, channel) -> ChannelRef:
        kind = classify_channel(channel)
        if kind is ChannelKind.THREAD:
            # A thread's category is the one owning its parent channel
            parent = channel.parent
            category_id = parent.category_id if parent else None
        else:
            category_id = getattr(channel, "category_id", None)

        guild = getattr(channel, "guild", None)
        return ChannelRef(
            id=channel.id,
            name=getattr(channel, "name", None) or str(channel.id),
            kind=kind,
            category_id=category_id,
            guild_id=guild.id if guild else None,
        )

    def to_thread_ref(self, thread) -> ThreadRef:
        parent = thread.parent
        return ThreadRef(
            id=thread.id,
            name=thread.name,
            parent_id=thread.parent_id,
            category_id=parent.category_id if parent else None,
            owner_id=thread.owner_id,
            guild_id=thread.guild.id if thread.guild else None,
        )

    def to_message_ref(self, message) -> MessageRef:
        return MessageRef(
            id=message.id,
            channel_id=message.channel.id,
            author_id=message.author.id,
            created_at=message.created_at,
        )

    async def _resolve_channel(self, channel_id: int):
        channel = self.client.get_channel(channel_id)
        if channel is None:
            channel = await self.client.fetch_channel(channel_id)
        return channel

    # ChatPlatformProtocol

    async def list_categories(self) -> list[CategoryRef]:
        return [
            self.to_category_ref(category)
            for guild in self.client.guilds
            for category in guild.categories
        ]

    async def get_category(self, category_id: int) -> CategoryRef | None:
        try:
            channel = await self._resolve_channel(category_id)
        except discord.NotFound:
            return None
        if classify_channel(channel) is not ChannelKind.CATEGORY:
            return None
        return self.to_category_ref(channel)

    async def list_category_channels(self, category_id: int) -> list[ChannelRef]:
        category = await self._resolve_channel(category_id)
        return [self.to_channel_ref(channel) for channel in category.channels]

    async def list_threads(self, category_id: int) -> list[ThreadRef]:
        threads = []
        for guild in self.client.guilds:
            for thread in guild.threads:
                parent = thread.parent
                if parent is not None and parent.category_id == category_id:
                    threads.append(self.to_thread_ref(thread))
        return threads

    async def fetch_latest_message(self, thread_id: int) -> MessageRef | None:
        thread = await self._resolve_channel(thread_id)
        async for message in thread.history(limit=1):
            return self.to_message_ref(message)
        return None

    async def fetch_messages(
        self, channel_id: int, limit: int | None = None
    ) -> list[MessageRef]:
        channel = await self._resolve_channel(channel_id)
        return [
            self.to_message_ref(message)
            async for message in channel.history(limit=limit)
        ]

    async def create_restricted_text_channel(
        self, category_id: int, name: str
    ) -> ChannelRef:
        category = await self._resolve_channel(category_id)
        guild = category.guild
        overwrites = {
            guild.default_role: discord.PermissionOverwrite(send_messages=False),
            guild.me: discord.PermissionOverwrite(send_messages=True),
        }
        channel = await category.create_text_channel(name, overwrites=overwrites)
        logger.info(f"Created channel #{name} ({channel.id}) in {category.name}")
        return self.to_channel_ref(channel)

    async def send_message(self, channel_id: int, content: str) -> MessageRef:
        channel = await self._resolve_channel(channel_id)
        message = await channel.send(content)
        return self.to_message_ref(message)

    async def edit_message(
        self, channel_id: int, message_id: int, artifact: SummaryArtifact
    ) -> None:
        channel = await self._resolve_channel(channel_id)
        # content=None clears the placeholder text
        await channel.get_partial_message(message_id).edit(
            content=None, embed=to_embed(artifact)
        )

    async def delete_message(self, channel_id: int, message_id: int) -> None:
        channel = await self._resolve_channel(channel_id)
        await channel.get_partial_message(message_id).delete()
