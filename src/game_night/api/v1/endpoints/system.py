"""System and transparency endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import func, select

from game_night.core.settings import settings
from game_night.models import CommunityPost, GameSession, User
from game_night.models.enums import SessionStatus

from ..dependencies import SessionDep

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "sessions": {
            "default_duration_hours": settings.default_session_duration_hours,
        },
        "posts": {
            "page_size_default": settings.posts_page_size_default,
            "page_size_max": settings.posts_page_size_max,
        },
        "files": {
            "upload_handle_ttl_seconds": settings.upload_handle_ttl_seconds,
            "max_upload_bytes": settings.max_upload_bytes,
        },
    }


@router.get("/stats")
async def get_stats(db: SessionDep) -> dict[str, int]:
    """Aggregate counts for a status page."""
    return {
        "users": db.scalar(select(func.count(User.id))) or 0,
        "open_sessions": db.scalar(
            select(func.count(GameSession.id)).where(
                GameSession.status == SessionStatus.OPEN.value
            )
        ) or 0,
        "posts": db.scalar(select(func.count(CommunityPost.id))) or 0,
    }
