"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    connections_router,
    files_router,
    posts_router,
    profiles_router,
    ratings_router,
    sessions_router,
    system_router,
)

__all__ = [
    "auth_router",
    "connections_router",
    "files_router",
    "posts_router",
    "profiles_router",
    "ratings_router",
    "sessions_router",
    "system_router",
]
