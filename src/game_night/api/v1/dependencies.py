"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from game_night.core.errors import AuthenticationError
from game_night.core.security import decode_access_token
from game_night.db.session import get_db
from game_night.models import User
from game_night.services.accounts import get_user

# Missing credentials are reported by get_current_user, not by the scheme.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Resolve the caller from a bearer token, or ``None`` when no token is sent.

    A token that is present but invalid still fails.
    """
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    user = get_user(db, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Resolve the caller or fail with 401."""
    if user is None:
        raise AuthenticationError("User not authenticated.")
    return user


# Type aliases for caller dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
