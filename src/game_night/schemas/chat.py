"""Session chat schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ChatMessageCreate(BaseModel):
    """Schema for posting into a session chat."""

    message_text: str = Field(..., max_length=2000)


class ChatMessageResponse(BaseModel):
    """Chat line with its author resolved."""

    id: int
    session_id: int
    user_id: int
    message_text: str
    created_at: datetime
    author_username: str
    author_display_name: str
    author_profile_image_url: str | None
    is_own_message: bool
