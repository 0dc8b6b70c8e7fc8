"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import LoginRequest, SignupRequest, TokenResponse, UserResponse, UserSummary
from .chat import ChatMessageCreate, ChatMessageResponse
from .common import ActionResult
from .connection import ConnectionRequestCreate, ConnectionStatusResponse, PendingRequestResponse
from .game_session import GameSessionCreate, GameSessionResponse, GameSessionUpdate
from .post import PostCreate, PostPage, PostResponse, PostUpdate
from .profile import ProfileResponse, ProfileUpdateRequest
from .rating import AverageRating, RatingCreate, RatingWithRater, SubmitRatingResult

__all__ = [
    "LoginRequest", "SignupRequest", "TokenResponse", "UserResponse", "UserSummary",
    "ChatMessageCreate", "ChatMessageResponse",
    "ActionResult",
    "ConnectionRequestCreate", "ConnectionStatusResponse", "PendingRequestResponse",
    "GameSessionCreate", "GameSessionResponse", "GameSessionUpdate",
    "PostCreate", "PostPage", "PostResponse", "PostUpdate",
    "ProfileResponse", "ProfileUpdateRequest",
    "AverageRating", "RatingCreate", "RatingWithRater", "SubmitRatingResult",
]
