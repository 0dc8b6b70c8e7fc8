"""Peer rating schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RatingCreate(BaseModel):
    """Schema for rating another participant of a session."""

    rated_user_id: int
    session_id: int
    rating: int
    comment: str | None = Field(None, max_length=2000)


class RatingResponse(BaseModel):
    id: int
    rated_user_id: int
    rater_user_id: int
    session_id: int
    rating: int
    comment: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RatingWithRater(RatingResponse):
    rater_username: str
    rater_display_name: str
    session_title: str


class AverageRating(BaseModel):
    average: float
    count: int


class SubmitRatingResult(BaseModel):
    success: bool
    message: str
    rating_id: int
    outcome: Literal["created", "updated"]
