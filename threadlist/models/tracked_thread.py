"""Tracked thread model for opt-in activity tracking."""

from sqlalchemy import BigInteger, Column, DateTime, func

from .base import Base


class TrackedThread(Base):
    """A thread a member explicitly opted in to tracking."""

    __tablename__ = "tracked_threads"

    # Discord snowflakes exceed 32 bits
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    author_id = Column(BigInteger, nullable=True)
    last_post = Column(DateTime(timezone=True), nullable=True)
    server_id = Column(BigInteger, nullable=True, index=True)
    category_id = Column(BigInteger, nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=func.now())

    def __repr__(self) -> str:
        return (
            f"<TrackedThread(id={self.id}, author={self.author_id}, "
            f"server={self.server_id}, category={self.category_id})>"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "author_id": self.author_id,
            "last_post": self.last_post.isoformat() if self.last_post else None,
            "server_id": self.server_id,
            "category_id": self.category_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
