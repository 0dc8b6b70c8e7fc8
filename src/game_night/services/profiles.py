"""Profile reads and the owner-only profile update."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from game_night.core.errors import ConflictError, NotFoundError
from game_night.models import Profile, User
from game_night.schemas.profile import ProfileResponse
from game_night.services.files import require_file, resolve_file_url
from game_night.services.updates import FieldUpdate, Updates, apply_updates, get_update

logger = logging.getLogger(__name__)

__all__ = [
    "get_profile",
    "to_profile_response",
    "get_my_profile",
    "get_user_profile",
    "update_my_profile",
]


def get_profile(db: Session, user_id: int) -> Profile | None:
    """Return the profile owned by ``user_id`` if one was ever saved."""
    return db.scalars(select(Profile).where(Profile.user_id == user_id)).first()


def to_profile_response(db: Session, profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        user_id=profile.user_id,
        username=profile.username,
        display_name=profile.display_name,
        bio=profile.bio,
        location_city=profile.location_city,
        location_region=profile.location_region,
        location_country=profile.location_country,
        experience_level=profile.experience_level,
        contact_preferences=profile.contact_preferences,
        profile_image_id=profile.profile_image_id,
        profile_image_url=resolve_file_url(db, profile.profile_image_id),
        is_complete=profile.is_complete,
        created_at=profile.created_at,
    )


def get_my_profile(db: Session, caller: User | None) -> ProfileResponse | None:
    """Return the caller's profile, or ``None`` when signed out or not yet created."""
    if caller is None:
        return None
    profile = get_profile(db, caller.id)
    if profile is None:
        return None
    return to_profile_response(db, profile)


def get_user_profile(db: Session, user_id: int) -> ProfileResponse:
    """Return another user's profile.

    Users who never saved a profile get a minimal one built from their
    account name.
    """
    profile = get_profile(db, user_id)
    if profile is not None:
        return to_profile_response(db, profile)

    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return ProfileResponse(
        id=None,
        user_id=user.id,
        username=user.name,
        profile_image_url=None,
        created_at=user.created_at,
    )


def update_my_profile(db: Session, caller: User, updates: Updates) -> ProfileResponse:
    """Apply a partial update to the caller's profile, creating it on first save.

    Raises:
        ConflictError: If the requested username belongs to someone else.
        NotFoundError: If a new profile image id does not exist.
    """
    updates = dict(updates)
    username = get_update(updates, "username")
    if username.is_set and not username.value.strip():
        # A blank username means "no username"; store NULL so it never collides.
        updates["username"] = username = FieldUpdate.cleared()
    if username.is_set:
        holder = db.scalars(select(Profile).where(Profile.username == username.value)).first()
        if holder is not None and holder.user_id != caller.id:
            raise ConflictError("Username already taken")

    image = get_update(updates, "profile_image_id")
    if image.is_set:
        require_file(db, image.value)

    profile = get_profile(db, caller.id)
    if profile is None:
        profile = Profile(user_id=caller.id)
        db.add(profile)
        logger.info("Creating profile for user %s", caller.id)

    apply_updates(profile, updates)
    db.commit()
    db.refresh(profile)
    return to_profile_response(db, profile)
