"""
Base Service Class

Lifecycle shared by the long-lived services constructed at process start:
lazy one-shot initialisation, idempotent close, and a health snapshot.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any


class BaseService(ABC):
    """
    Abstract base class for services with an async lifecycle.

    ``initialize`` and ``close`` may each be called any number of times;
    the service-specific hooks run at most once.
    """

    def __init__(self, service_name: str | None = None):
        self._service_name = service_name or self.__class__.__name__
        self.logger = logging.getLogger(self.__class__.__module__)
        self._initialized = False
        self._closed = False
        self._initialization_lock = asyncio.Lock()

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def initialize(self) -> None:
        """Initialize the service once, even under concurrent callers."""
        if self._initialized or self._closed:
            return

        async with self._initialization_lock:
            if self._initialized or self._closed:
                return

            try:
                self.logger.info(f"Initializing {self._service_name}...")
                await self._initialize()
                self._initialized = True
                self.logger.info(f"{self._service_name} initialized successfully")
            except Exception as e:
                self.logger.error(f"Failed to initialize {self._service_name}: {e}")
                raise

    @abstractmethod
    async def _initialize(self) -> None:
        """Service-specific initialization logic."""

    async def close(self) -> None:
        if self._closed:
            return

        self.logger.info(f"Closing {self._service_name}...")
        try:
            await self._close()
            self.logger.info(f"{self._service_name} closed successfully")
        except Exception as e:
            self.logger.error(f"Error closing {self._service_name}: {e}")
            raise
        finally:
            # Always mark as closed, even if cleanup failed
            self._closed = True

    async def _close(self) -> None:  # noqa: B027
        """Service-specific cleanup logic. Default does nothing."""

    async def ensure_initialized(self) -> None:
        """
        Ensure the service is initialized, initializing if necessary.

        Raises:
            RuntimeError: If the service is closed
        """
        if self._closed:
            raise RuntimeError(f"Service {self._service_name} is closed")

        if not self._initialized:
            await self.initialize()

    def health_check(self) -> dict[str, Any]:
        status = "healthy" if self._initialized and not self._closed else "unhealthy"

        return {
            "status": status,
            "service": self._service_name,
            "initialized": self._initialized,
            "closed": self._closed,
        }

    async def __aenter__(self):
        await self.ensure_initialized()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name={self._service_name}, "
            f"initialized={self._initialized}, "
            f"closed={self._closed})"
        )
