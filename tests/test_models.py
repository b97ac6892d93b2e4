"""
Tests for entity, event and summary models
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from tests.utils.factories import NOW, CategoryFactory, ChannelFactory, ThreadFactory
from threadlist.models import BucketName, SummaryArtifact, SummarySection
from threadlist.models.discord import (
    ChannelKind,
    ChannelRef,
    MessageCreated,
    SessionReady,
    ThreadCreated,
    TriggerEvent,
)
from threadlist.utils.errors import (
    ArtifactChannelError,
    InvalidTimestampError,
    ThreadListError,
)

trigger_event = TypeAdapter(TriggerEvent)


class TestEntities:
    """Test Discord entity models"""

    def test_refs_are_frozen(self):
        category = CategoryFactory.create()

        with pytest.raises(ValidationError):
            category.name = "Renamed"

    def test_mentions(self):
        assert ChannelFactory.create_text(channel_id=200).mention == "<#200>"
        assert ThreadFactory.create(thread_id=301).mention == "<#301>"

    def test_channel_kind_is_closed(self):
        with pytest.raises(ValidationError):
            ChannelRef.model_validate({"id": 1, "name": "x", "kind": "announcement"})

        assert ChannelKind("thread") is ChannelKind.THREAD


class TestTriggerEvents:
    """Test the discriminated event union"""

    def test_discriminates_by_type(self):
        assert isinstance(
            trigger_event.validate_python({"type": "session_ready"}), SessionReady
        )
        message = trigger_event.validate_python(
            {
                "type": "message_created",
                "channel": {"id": 300, "name": "thread-300", "kind": "thread"},
                "author_id": 1001,
            }
        )
        assert isinstance(message, MessageCreated)
        assert message.channel.kind is ChannelKind.THREAD

        thread = trigger_event.validate_python(
            {"type": "thread_created", "thread": {"id": 301, "name": "thread-301"}}
        )
        assert isinstance(thread, ThreadCreated)

    def test_unknown_event_type_is_rejected(self):
        with pytest.raises(ValidationError):
            trigger_event.validate_python({"type": "reaction_added"})


class TestSummaryModels:
    """Test bucket labels and artifact text"""

    @pytest.mark.parametrize(
        "name,label",
        [
            (BucketName.DAY, "Threads active in past day:"),
            (BucketName.WEEK, "Threads active in past week:"),
            (BucketName.MONTH, "Threads active in past month:"),
            (BucketName.OLDER, "Older threads:"),
        ],
    )
    def test_labels(self, name, label):
        assert name.label == label

    def test_bucket_order(self):
        assert list(BucketName) == [
            BucketName.DAY,
            BucketName.WEEK,
            BucketName.MONTH,
            BucketName.OLDER,
        ]

    def test_to_text(self):
        artifact = SummaryArtifact(
            title="Recently Active Threads",
            sections=(SummarySection(name="Older threads:", value="None"),),
            generated_at=NOW,
        )

        assert artifact.to_text() == (
            "**Recently Active Threads**\n__Older threads:__\nNone"
        )


class TestErrors:
    """Test the exception taxonomy"""

    def test_hierarchy(self):
        assert issubclass(ArtifactChannelError, ThreadListError)
        assert issubclass(InvalidTimestampError, ThreadListError)
        assert issubclass(InvalidTimestampError, ValueError)

    def test_channel_error_carries_category(self):
        error = ArtifactChannelError(10, "could not create #thread-list")

        assert error.category_id == 10
        assert str(error) == "Category 10: could not create #thread-list"
