"""Database and domain models for the thread list bot."""

from .activity import BucketName, SummaryArtifact, SummarySection, ThreadActivity
from .base import Base
from .tracked_thread import TrackedThread

__all__ = [
    "Base",
    "TrackedThread",
    "BucketName",
    "ThreadActivity",
    "SummarySection",
    "SummaryArtifact",
]
