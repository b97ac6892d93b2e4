"""Exception taxonomy for the thread list aggregator.

Per-item failures (a single thread probe, a single stray-message delete) never
raise past the service that hit them. Category-level failures raise one of the
``ThreadListError`` subclasses below and abort that category's refresh only.
"""


class ThreadListError(Exception):
    """Base class for aggregation failures."""


class ArtifactChannelError(ThreadListError):
    """The output channel could not be found or created."""

    def __init__(self, category_id: int, message: str):
        self.category_id = category_id
        super().__init__(f"Category {category_id}: {message}")


class ArtifactMessageError(ThreadListError):
    """The canonical summary message could not be listed, sent or edited."""

    def __init__(self, channel_id: int, message: str):
        self.channel_id = channel_id
        super().__init__(f"Channel {channel_id}: {message}")


class InvalidTimestampError(ThreadListError, ValueError):
    """A timestamp handed to the bucketer is not a timezone-aware datetime."""
