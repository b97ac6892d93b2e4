"""
Tests for TrackedThreadStore

Runs against a throwaway SQLite file per test.
"""

import pytest

from tests.utils.factories import GUILD_ID, MEMBER_ID, NOW
from threadlist.models.tracked_thread import TrackedThread
from threadlist.services.tracked_threads import TrackedThreadStore


@pytest.fixture
def store(tmp_path):
    return TrackedThreadStore(f"sqlite:///{tmp_path / 'tracked.db'}")


class TestLifecycle:
    """Test store initialisation and shutdown"""

    def test_use_before_initialize_raises(self, store):
        with pytest.raises(RuntimeError, match="not initialized"):
            store.is_tracked(1)

    @pytest.mark.asyncio
    async def test_initialize_creates_schema(self, store):
        await store.initialize()

        assert store.is_initialized
        assert store.list_tracked() == []
        assert store.health_check()["status"] == "healthy"

        await store.close()
        assert store.is_closed


class TestOptIn:
    """Test starting to track threads"""

    @pytest.mark.asyncio
    async def test_opt_in_persists_record(self, store):
        await store.initialize()

        assert store.opt_in(
            300,
            author_id=MEMBER_ID,
            server_id=GUILD_ID,
            category_id=10,
            last_post=NOW,
        )

        record = store.get(300)
        assert isinstance(record, TrackedThread)
        assert record.author_id == MEMBER_ID
        assert record.server_id == GUILD_ID
        assert record.category_id == 10
        assert record.created_at is not None
        assert store.is_tracked(300)

    @pytest.mark.asyncio
    async def test_opt_in_twice_is_rejected(self, store):
        await store.initialize()

        assert store.opt_in(300) is True
        assert store.opt_in(300) is False
        assert len(store.list_tracked()) == 1

    @pytest.mark.asyncio
    async def test_large_snowflake_ids(self, store):
        await store.initialize()
        snowflake = 1234567890123456789

        store.opt_in(snowflake, server_id=snowflake)

        assert store.get(snowflake).server_id == snowflake


class TestOptOut:
    """Test stopping tracking"""

    @pytest.mark.asyncio
    async def test_opt_out_removes_record(self, store):
        await store.initialize()
        store.opt_in(300)

        assert store.opt_out(300) is True
        assert store.is_tracked(300) is False

    @pytest.mark.asyncio
    async def test_opt_out_untracked(self, store):
        await store.initialize()

        assert store.opt_out(300) is False


class TestListTracked:
    """Test listing tracked threads"""

    @pytest.mark.asyncio
    async def test_filter_by_server(self, store):
        await store.initialize()
        store.opt_in(1, server_id=500)
        store.opt_in(2, server_id=600)
        store.opt_in(3, server_id=500)

        assert sorted(t.id for t in store.list_tracked(server_id=500)) == [1, 3]
        assert len(store.list_tracked()) == 3

    @pytest.mark.asyncio
    async def test_to_dict(self, store):
        await store.initialize()
        store.opt_in(300, author_id=MEMBER_ID, category_id=10)

        data = store.get(300).to_dict()

        assert data["id"] == 300
        assert data["author_id"] == MEMBER_ID
        assert data["category_id"] == 10
        assert data["last_post"] is None
        assert "created_at" in data
