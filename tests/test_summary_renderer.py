"""
Tests for SummaryRenderer.
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from tests.utils.factories import NOW, ActivityFactory
from threadlist.models.activity import BucketName
from threadlist.services.summary_renderer import EMPTY_SECTION, SummaryRenderer
from threadlist.services.time_bucketer import bucket


@pytest.fixture
def renderer():
    return SummaryRenderer()


class TestRender:
    """Test section layout"""

    def test_every_bucket_renders_a_section_in_order(self, renderer):
        artifact = renderer.render("Recently Active Threads", {}, generated_at=NOW)

        assert artifact.title == "Recently Active Threads"
        assert artifact.generated_at == NOW
        assert [s.name for s in artifact.sections] == [
            "Threads active in past day:",
            "Threads active in past week:",
            "Threads active in past month:",
            "Older threads:",
        ]
        assert all(s.value == EMPTY_SECTION for s in artifact.sections)

    def test_thread_lines(self, renderer):
        activity = ActivityFactory.create(301, timedelta(hours=2))

        artifact = renderer.render(
            "Title", {BucketName.DAY: [activity]}, generated_at=NOW
        )

        assert artifact.sections[0].value == "\t<#301> - last: 2024-05-01 10:00 UTC"
        assert artifact.sections[1].value == EMPTY_SECTION

    def test_bucket_order_is_kept_within_section(self, renderer):
        activities = [
            ActivityFactory.create(1, timedelta(hours=1)),
            ActivityFactory.create(2, timedelta(days=1)),
            ActivityFactory.create(3, timedelta(days=2)),
        ]
        bucketed = bucket(NOW, ((a, a.last_active) for a in activities))

        artifact = renderer.render("Title", bucketed, generated_at=NOW)

        day, week, month, older = (s.value for s in artifact.sections)
        assert day == "\t<#1> - last: 2024-05-01 11:00 UTC"
        # exactly 24h old belongs to the week
        assert week.splitlines() == [
            "\t<#2> - last: 2024-04-30 12:00 UTC",
            "\t<#3> - last: 2024-04-29 12:00 UTC",
        ]
        assert month == EMPTY_SECTION
        assert older == EMPTY_SECTION

    def test_rendering_is_deterministic(self, renderer):
        bucketed = {BucketName.OLDER: [ActivityFactory.create(5, timedelta(days=90))]}

        first = renderer.render("Title", bucketed, generated_at=NOW)
        second = renderer.render("Title", bucketed, generated_at=NOW)

        assert first == second
        assert first.to_text() == second.to_text()


class TestTimestampFormat:
    """Test 'last active' formatting"""

    def test_aware_timestamps_shown_in_utc(self, renderer):
        plus_five = timezone(timedelta(hours=5))

        assert (
            renderer.format_timestamp(datetime(2024, 5, 1, 17, 30, tzinfo=plus_five))
            == "2024-05-01 12:30 UTC"
        )

    def test_custom_format(self):
        renderer = SummaryRenderer(timestamp_format="%d/%m/%Y")

        assert renderer.format_timestamp(datetime(2024, 5, 1, tzinfo=UTC)) == "01/05/2024"


class TestToText:
    """Test plain-text rendering of the artifact"""

    def test_to_text_includes_every_section(self, renderer):
        artifact = renderer.render(
            "Recently Active Threads",
            {BucketName.WEEK: [ActivityFactory.create(7, timedelta(days=3))]},
            generated_at=NOW,
        )

        text = artifact.to_text()

        assert text.startswith("**Recently Active Threads**")
        assert "__Threads active in past week:__" in text
        assert "<#7>" in text
        assert text.count(EMPTY_SECTION) == 3
