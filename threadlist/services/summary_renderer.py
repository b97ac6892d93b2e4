"""Render bucketed thread activity into a summary artifact."""

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

from threadlist.models.activity import (
    BucketName,
    SummaryArtifact,
    SummarySection,
    ThreadActivity,
)

EMPTY_SECTION = "None"


class SummaryRenderer:
    """Formats one labelled section per bucket. Pure, touches no channel."""

    def __init__(self, timestamp_format: str = "%Y-%m-%d %H:%M UTC"):
        self.timestamp_format = timestamp_format

    def format_timestamp(self, value: datetime) -> str:
        # Aware timestamps are shown in UTC to match the default format
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.strftime(self.timestamp_format)

    def format_line(self, activity: ThreadActivity) -> str:
        last_active = self.format_timestamp(activity.last_active)
        return f"\t{activity.thread.mention} - last: {last_active}"

    def render(
        self,
        title: str,
        bucketed: Mapping[BucketName, Sequence[ThreadActivity]],
        generated_at: datetime,
    ) -> SummaryArtifact:
        """
        Build the artifact for one category.

        Every bucket gets a section, in bucket order, even when empty.
        """
        sections = []
        for name in BucketName:
            activities = bucketed.get(name, ())
            value = "\n".join(self.format_line(activity) for activity in activities)
            sections.append(
                SummarySection(name=name.label, value=value or EMPTY_SECTION)
            )

        return SummaryArtifact(
            title=title, sections=tuple(sections), generated_at=generated_at
        )
