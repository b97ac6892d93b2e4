"""Thread activity and rendered summary models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from .discord.entities import ThreadRef


class BucketName(StrEnum):
    """Recency windows, in display order."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    OLDER = "older"

    @property
    def label(self) -> str:
        if self is BucketName.OLDER:
            return "Older threads:"
        return f"Threads active in past {self.value}:"


class ThreadActivity(BaseModel):
    """A thread paired with the creation time of its most recent message."""

    thread: ThreadRef
    last_active: datetime

    model_config = ConfigDict(frozen=True)


class SummarySection(BaseModel):
    name: str
    value: str

    model_config = ConfigDict(frozen=True)


class SummaryArtifact(BaseModel):
    """Platform-neutral rendering of one category's thread list."""

    title: str
    sections: tuple[SummarySection, ...]
    generated_at: datetime

    model_config = ConfigDict(frozen=True)

    def to_text(self) -> str:
        """Plain-text rendering, used for command replies and logs."""
        lines = [f"**{self.title}**"]
        for section in self.sections:
            lines.append(f"__{section.name}__")
            lines.append(section.value)
        return "\n".join(lines)
