"""Game session schemas."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from game_night.models.enums import ExperienceLevel, ParticipantStatus, SessionStatus
from game_night.schemas.common import PatchModel


class GameSessionCreate(BaseModel):
    """Schema for hosting a new session."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    location_city: str
    location_region: str
    location_country: str
    meeting_point: str | None = None
    scheduled_timestamp: int = Field(..., description="Start time in epoch milliseconds (UTC)")
    duration_hours: float | None = None
    max_players: int
    difficulty_level: ExperienceLevel | None = None
    special_rules: str | None = None
    image_id: str | None = None


class GameSessionUpdate(PatchModel):
    """Partial update of a session by its host; ``null`` clears optional fields."""

    clearable_fields: ClassVar[frozenset[str]] = frozenset(
        {"description", "meeting_point", "difficulty_level", "special_rules", "image_id"}
    )

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    location_city: str | None = None
    location_region: str | None = None
    location_country: str | None = None
    meeting_point: str | None = None
    scheduled_timestamp: int | None = None
    duration_hours: float | None = None
    max_players: int | None = None
    difficulty_level: ExperienceLevel | None = None
    special_rules: str | None = None
    image_id: str | None = None


class ParticipantResponse(BaseModel):
    """Roster entry."""

    id: int
    session_id: int
    user_id: int
    status: ParticipantStatus
    joined_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GameSessionResponse(BaseModel):
    """Session enriched with host details, roster and image URL."""

    id: int
    host_id: int
    title: str
    description: str | None
    location_city: str
    location_region: str
    location_country: str
    meeting_point: str | None
    scheduled_timestamp: int
    duration_hours: float | None
    max_players: int
    difficulty_level: ExperienceLevel | None
    special_rules: str | None
    status: SessionStatus
    image_id: str | None
    created_at: datetime

    host_display_name: str
    host_username: str
    host_profile_image_url: str | None
    current_players: int
    participants: list[ParticipantResponse]
    image_url: str | None


class SessionCreated(BaseModel):
    id: int
