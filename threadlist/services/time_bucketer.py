"""Partition timestamped items into fixed recency windows.

Windows are half-open ``(lower, upper]`` intervals measured back from the
refresh instant: a timestamp exactly 24h old is ``week``, exactly 7d old is
``month`` and exactly 30d old is ``older``.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import TypeVar

from threadlist.models.activity import BucketName
from threadlist.utils.errors import InvalidTimestampError

T = TypeVar("T")

# Lower edge of each bounded window, as an age relative to now. OLDER is unbounded.
BUCKET_WINDOWS: dict[BucketName, timedelta] = {
    BucketName.DAY: timedelta(hours=24),
    BucketName.WEEK: timedelta(days=7),
    BucketName.MONTH: timedelta(days=30),
}


def _require_aware(value: object, label: str) -> datetime:
    if not isinstance(value, datetime):
        raise InvalidTimestampError(
            f"{label} must be a datetime, got {type(value).__name__}"
        )
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidTimestampError(f"{label} must be timezone-aware: {value!r}")
    return value


def bucket_for(now: datetime, timestamp: datetime) -> BucketName:
    """Return the bucket a single timestamp falls into."""
    age = now - timestamp
    for name, lower_edge in BUCKET_WINDOWS.items():
        # age < edge  <=>  timestamp > now - edge
        if age < lower_edge:
            return name
    return BucketName.OLDER


def bucket(
    now: datetime, items: Iterable[tuple[T, datetime]]
) -> dict[BucketName, list[T]]:
    """
    Place every item into exactly one recency bucket.

    Args:
        now: Reference instant, timezone-aware
        items: ``(item, timestamp)`` pairs with timezone-aware timestamps

    Returns:
        Every bucket in display order, each holding its items in input order

    Raises:
        InvalidTimestampError: If ``now`` or any timestamp is not an aware datetime
    """
    _require_aware(now, "now")
    buckets: dict[BucketName, list[T]] = {name: [] for name in BucketName}
    for item, timestamp in items:
        _require_aware(timestamp, "timestamp")
        # Timestamps ahead of now (clock skew) have a negative age and land in DAY
        buckets[bucket_for(now, timestamp)].append(item)
    return buckets
