"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .connections import router as connections_router
from .files import router as files_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .ratings import router as ratings_router
from .sessions import router as sessions_router
from .system import router as system_router

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
