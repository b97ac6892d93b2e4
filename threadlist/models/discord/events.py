"""Triggering events consumed by the aggregation orchestrator.

Each gateway listener translates its raw discord.py payload into one of these
models; nothing downstream of the listeners sees discord.py objects.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .entities import CategoryRef, ChannelRef, ThreadRef


class SessionReady(BaseModel):
    """The gateway session is ready; carries every known category."""

    type: Literal["session_ready"] = "session_ready"
    categories: tuple[CategoryRef, ...] = ()

    model_config = ConfigDict(frozen=True)


class MessageCreated(BaseModel):
    """A message was posted in ``channel``."""

    type: Literal["message_created"] = "message_created"
    channel: ChannelRef
    author_id: int | None = None

    model_config = ConfigDict(frozen=True)


class ThreadCreated(BaseModel):
    """A thread was opened. Observed only."""

    type: Literal["thread_created"] = "thread_created"
    thread: ThreadRef

    model_config = ConfigDict(frozen=True)


TriggerEvent = Annotated[
    SessionReady | MessageCreated | ThreadCreated, Field(discriminator="type")
]
