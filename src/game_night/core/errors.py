"""Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``main`` registers a single handler that
renders them as ``{"detail": ..., "error": ...}`` with the class status code.
Every failure is terminal for the invocation; nothing here is retried.
"""

from __future__ import annotations

from fastapi import status


class GameNightError(RuntimeError):
    """Base exception for expected, user-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(GameNightError):
    """No caller could be resolved from the request."""

    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(GameNightError):
    """The caller lacks rights over the target entity."""

    status_code = status.HTTP_403_FORBIDDEN


class ValidationError(GameNightError):
    """Malformed, missing or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(GameNightError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(GameNightError):
    """The action duplicates existing state (already joined, username taken...)."""

    status_code = status.HTTP_409_CONFLICT


class CapacityError(GameNightError):
    """The session has no free seats."""

    status_code = status.HTTP_409_CONFLICT


class StateError(GameNightError):
    """The action is invalid for the entity's current lifecycle state."""

    status_code = status.HTTP_409_CONFLICT


__all__ = [
    "GameNightError",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "CapacityError",
    "StateError",
]
