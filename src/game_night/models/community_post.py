"""Model for community feed posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from game_night.db.session import Base
from game_night.db.time import utcnow
from game_night.models.enums import PostType


class CommunityPost(Base):
    """Post in the community feed.

    ``likes_count`` is a bare counter: likes are not tracked per user.
    ``comments_count`` is reserved and stays at zero.
    """

    __tablename__ = "community_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    post_type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=PostType.GENERAL.value,
        index=True,
    )
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # No cascade to the blob on delete.
    image_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("stored_files.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
