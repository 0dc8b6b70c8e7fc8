"""SQLAlchemy models for the Game Night Planner."""

from .chat_message import ChatMessage
from .community_post import CommunityPost
from .connection import UserConnection
from .game_session import GameSession, SessionParticipant
from .profile import Profile
from .rating import UserRating
from .stored_file import StoredFile
from .user import User

__all__ = [
    "ChatMessage",
    "CommunityPost",
    "UserConnection",
    "GameSession", "SessionParticipant",
    "Profile",
    "UserRating",
    "StoredFile",
    "User",
]
