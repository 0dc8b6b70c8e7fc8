"""Profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from game_night.schemas.profile import ProfileResponse, ProfileUpdateRequest
from game_night.services import profiles

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse | None)
async def get_my_profile(db: SessionDep, caller: OptionalUserDep) -> ProfileResponse | None:
    """Return the caller's profile, or ``null`` if signed out or not created yet."""
    return profiles.get_my_profile(db, caller)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    caller: CurrentUserDep,
    db: SessionDep,
) -> ProfileResponse:
    """Partially update the caller's profile; omitted fields are untouched."""
    return profiles.update_my_profile(db, caller, payload.to_updates())


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_user_profile_by_id(user_id: int, db: SessionDep) -> ProfileResponse:
    return profiles.get_user_profile(db, user_id)
