"""Community post schemas."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, Field

from game_night.models.enums import PostType
from game_night.schemas.common import PatchModel


class PostCreate(BaseModel):
    """Schema for publishing a post."""

    title: str | None = Field(None, max_length=200)
    content: str = Field(..., max_length=10000)
    post_type: PostType | None = None
    tags: list[str] | None = None
    image_id: str | None = None


class PostUpdate(PatchModel):
    """Partial update by the author; ``null`` clears title or image."""

    clearable_fields: ClassVar[frozenset[str]] = frozenset({"title", "image_id"})

    title: str | None = Field(None, max_length=200)
    content: str | None = Field(None, max_length=10000)
    post_type: PostType | None = None
    tags: list[str] | None = None
    image_id: str | None = None


class PostResponse(BaseModel):
    """Post enriched with author details and image URL."""

    id: int
    author_id: int
    title: str | None
    content: str
    post_type: PostType
    tags: list[str] | None
    likes_count: int
    comments_count: int
    image_id: str | None
    created_at: datetime
    author_username: str
    author_display_name: str
    author_profile_image_url: str | None
    image_url: str | None


class PostPage(BaseModel):
    """One page of the feed."""

    page: list[PostResponse]
    is_done: bool
    continue_cursor: str


class PostCreated(BaseModel):
    id: int
