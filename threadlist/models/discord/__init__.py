"""Typed models for Discord entities and gateway triggers."""

from .entities import CategoryRef, ChannelKind, ChannelRef, MessageRef, ThreadRef
from .events import MessageCreated, SessionReady, ThreadCreated, TriggerEvent

__all__ = [
    # Entities
    "ChannelKind",
    "CategoryRef",
    "ChannelRef",
    "ThreadRef",
    "MessageRef",
    # Events
    "SessionReady",
    "MessageCreated",
    "ThreadCreated",
    "TriggerEvent",
]
