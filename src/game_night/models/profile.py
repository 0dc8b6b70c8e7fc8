"""SQLAlchemy model for user profiles."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from game_night.db.session import Base
from game_night.db.time import utcnow


class Profile(Base):
    """Public profile, one per user, created on first save."""

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    # Unique when set; NULLs do not collide.
    username: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_city: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_region: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_country: Mapped[str | None] = mapped_column(Text, nullable=True)
    experience_level: Mapped[str | None] = mapped_column(String(16), nullable=True)
    contact_preferences: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    profile_image_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("stored_files.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    @property
    def can_host(self) -> bool:
        """Username and city are the minimum needed to host a session."""
        return bool(self.username) and bool(self.location_city)

    @property
    def is_complete(self) -> bool:
        """Username plus a full city/region/country location."""
        return (
            bool(self.username)
            and bool(self.location_city)
            and bool(self.location_region)
            and bool(self.location_country)
        )
