"""Peer rating endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from game_night.schemas.rating import (
    AverageRating,
    RatingCreate,
    RatingResponse,
    RatingWithRater,
    SubmitRatingResult,
)
from game_night.services import ratings

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("/", response_model=SubmitRatingResult)
async def submit_rating(
    payload: RatingCreate,
    caller: CurrentUserDep,
    db: SessionDep,
) -> SubmitRatingResult:
    """Rate a co-player; resubmitting overwrites the earlier rating."""
    return ratings.submit_rating(db, caller, payload)


@router.get("/mine", response_model=RatingResponse | None)
async def get_rating_by_rater_for_session(
    db: SessionDep,
    caller: OptionalUserDep,
    rated_user_id: int = Query(...),
    session_id: int = Query(...),
) -> RatingResponse | None:
    rating = ratings.get_rating_by_rater_for_session(db, caller, rated_user_id, session_id)
    return RatingResponse.model_validate(rating) if rating is not None else None


@router.get("/users/{user_id}", response_model=list[RatingWithRater])
async def get_ratings_for_user(user_id: int, db: SessionDep) -> list[RatingWithRater]:
    return ratings.get_ratings_for_user(db, user_id)


@router.get("/users/{user_id}/average", response_model=AverageRating)
async def get_average_rating_for_user(user_id: int, db: SessionDep) -> AverageRating:
    return ratings.get_average_rating_for_user(db, user_id)
