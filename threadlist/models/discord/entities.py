"""Discord entity models (categories, channels, threads, messages)"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ChannelKind(StrEnum):
    """Closed set of channel kinds the aggregator distinguishes."""

    CATEGORY = "category"
    TEXT = "text"
    THREAD = "thread"
    FORUM = "forum"
    VOICE = "voice"
    OTHER = "other"


class CategoryRef(BaseModel):
    """A category and the guild it belongs to."""

    id: int
    name: str
    guild_id: int | None = None

    model_config = ConfigDict(frozen=True)


class ChannelRef(BaseModel):
    """Any guild channel, tagged with its kind."""

    id: int
    name: str
    kind: ChannelKind
    category_id: int | None = None
    guild_id: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def mention(self) -> str:
        return f"<#{self.id}>"


class ThreadRef(BaseModel):
    """A thread, its parent channel and the category owning that parent."""

    id: int
    name: str
    parent_id: int | None = None
    category_id: int | None = None
    owner_id: int | None = None
    guild_id: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def mention(self) -> str:
        return f"<#{self.id}>"


class MessageRef(BaseModel):
    id: int
    channel_id: int
    author_id: int
    created_at: datetime

    model_config = ConfigDict(frozen=True)
