"""Models for hosted game sessions and their participant roster."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from game_night.db.session import Base
from game_night.db.time import utcnow
from game_night.models.enums import SessionStatus


class GameSession(Base):
    """In-person game night hosted by one user.

    Status moves open <-> full as seats fill and empty; cancelled and
    completed are terminal. Nothing currently moves a session to
    in_progress.
    """

    __tablename__ = "game_sessions"
    __table_args__ = (
        CheckConstraint("max_players > 0", name="ck_game_sessions_max_players"),
        Index("ix_game_sessions_status_scheduled", "status", "scheduled_timestamp"),
        Index(
            "ix_game_sessions_location",
            "location_country",
            "location_region",
            "location_city",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    host_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_city: Mapped[str] = mapped_column(Text, nullable=False)
    location_region: Mapped[str] = mapped_column(Text, nullable=False)
    location_country: Mapped[str] = mapped_column(Text, nullable=False)
    meeting_point: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Epoch milliseconds, UTC.
    scheduled_timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    duration_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_players: Mapped[int] = mapped_column(Integer, nullable=False)
    difficulty_level: Mapped[str | None] = mapped_column(String(16), nullable=True)
    special_rules: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=SessionStatus.OPEN.value,
    )
    image_id: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("stored_files.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class SessionParticipant(Base):
    """Seat record linking a user to a session."""

    __tablename__ = "session_participants"
    __table_args__ = (
        UniqueConstraint("session_id", "user_id", name="uq_session_participant"),
        Index("ix_session_participants_session_status", "session_id", "status"),
        Index("ix_session_participants_user_session", "user_id", "session_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("game_sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(24), nullable=False)
    joined_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
