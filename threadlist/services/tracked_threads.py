"""Persistent store of threads members opted in to activity tracking.

Backs the ``/opt-in`` and ``/opt-out`` commands. The aggregation engine does
not read it.
"""

from datetime import datetime

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from threadlist.models.base import Base, get_db_session
from threadlist.models.tracked_thread import TrackedThread
from threadlist.services.base import BaseService


class TrackedThreadStore(BaseService):
    """SQLAlchemy-backed tracked thread records, one row per thread."""

    def __init__(self, database_url: str):
        """
        Args:
            database_url: SQLAlchemy connection URL
        """
        super().__init__("TrackedThreadStore")
        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    async def _initialize(self) -> None:
        self._engine = create_engine(self.database_url, pool_pre_ping=True)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(
            bind=self._engine, expire_on_commit=False
        )

    async def _close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()

    def _sessions(self) -> sessionmaker[Session]:
        if self._session_factory is None:
            raise RuntimeError(f"{self.service_name} is not initialized")
        return self._session_factory

    def get(self, thread_id: int) -> TrackedThread | None:
        with get_db_session(self._sessions()) as session:
            return session.get(TrackedThread, thread_id)

    def is_tracked(self, thread_id: int) -> bool:
        return self.get(thread_id) is not None

    def opt_in(
        self,
        thread_id: int,
        author_id: int | None = None,
        server_id: int | None = None,
        category_id: int | None = None,
        last_post: datetime | None = None,
    ) -> bool:
        """
        Start tracking a thread.

        Returns:
            True if the thread is now tracked, False if it already was
        """
        if self.is_tracked(thread_id):
            return False

        record = TrackedThread(
            id=thread_id,
            author_id=author_id,
            server_id=server_id,
            category_id=category_id,
            last_post=last_post,
        )
        try:
            with get_db_session(self._sessions()) as session:
                session.add(record)
        except IntegrityError:
            # Lost a race with a concurrent opt-in for the same thread
            self.logger.info(f"Thread {thread_id} was opted in concurrently")
            return False

        self.logger.info(f"Thread {thread_id} is now being tracked")
        return True

    def opt_out(self, thread_id: int) -> bool:
        """
        Stop tracking a thread.

        Returns:
            True if the thread was tracked and has been removed
        """
        with get_db_session(self._sessions()) as session:
            record = session.get(TrackedThread, thread_id)
            if record is None:
                return False
            session.delete(record)

        self.logger.info(f"Thread {thread_id} removed from thread tracking")
        return True

    def list_tracked(self, server_id: int | None = None) -> list[TrackedThread]:
        query = select(TrackedThread).order_by(TrackedThread.created_at)
        if server_id is not None:
            query = query.where(TrackedThread.server_id == server_id)
        with get_db_session(self._sessions()) as session:
            return list(session.scalars(query))
