"""Sign-up and sign-in for password accounts."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from game_night.core import security
from game_night.core.errors import AuthenticationError, ConflictError
from game_night.models import User

logger = logging.getLogger(__name__)

__all__ = ["create_user", "authenticate", "get_user"]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def create_user(db: Session, *, email: str, password: str, name: str | None) -> User:
    """Register a new account; emails are unique."""
    existing = db.scalars(select(User).where(User.email == email)).first()
    if existing is not None:
        raise ConflictError("An account with this email already exists.")

    user = User(email=email, name=name, password_hash=security.hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, *, email: str, password: str) -> User:
    """Return the user for valid credentials."""
    user = db.scalars(select(User).where(User.email == email)).first()
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password.")
    return user
