"""Interfaces of the external collaborators the services depend on."""

from .chat_platform import ChatPlatformProtocol

__all__ = ["ChatPlatformProtocol"]
