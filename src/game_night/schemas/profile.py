"""Profile schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, Field

from game_night.models.enums import ExperienceLevel
from game_night.schemas.common import PatchModel


class ProfileUpdateRequest(PatchModel):
    """Partial update of the caller's profile; ``null`` clears a field."""

    clearable_fields: ClassVar[frozenset[str]] = frozenset(
        {
            "username",
            "display_name",
            "bio",
            "location_city",
            "location_region",
            "location_country",
            "experience_level",
            "contact_preferences",
            "profile_image_id",
        }
    )

    username: str | None = Field(None, max_length=64)
    display_name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=2000)
    location_city: str | None = None
    location_region: str | None = None
    location_country: str | None = None
    experience_level: ExperienceLevel | None = None
    contact_preferences: dict[str, Any] | None = None
    profile_image_id: str | None = None


class ProfileResponse(BaseModel):
    """Profile with its avatar resolved to a URL."""

    id: int | None
    user_id: int
    username: str | None = None
    display_name: str | None = None
    bio: str | None = None
    location_city: str | None = None
    location_region: str | None = None
    location_country: str | None = None
    experience_level: ExperienceLevel | None = None
    contact_preferences: dict[str, Any] | None = None
    profile_image_id: str | None = None
    profile_image_url: str | None = None
    is_complete: bool = False
    created_at: datetime | None = None
