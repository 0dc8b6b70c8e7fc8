"""Directed follow/block edges between users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from game_night.db.session import Base
from game_night.db.time import utcnow


class UserConnection(Base):
    """Edge from ``follower_id`` to ``following_id``.

    At most one edge exists per ordered pair; a block edge points from the
    blocker to the blocked user.
    """

    __tablename__ = "user_connections"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_user_connection_pair"),
        Index("ix_user_connections_following_follower", "following_id", "follower_id"),
        Index("ix_user_connections_follower_status", "follower_id", "status"),
        Index("ix_user_connections_following_status", "following_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    follower_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    following_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
