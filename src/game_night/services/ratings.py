"""Peer ratings between people who played in the same session."""
from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from game_night.core.errors import AuthorizationError, ValidationError
from game_night.models import GameSession, User, UserRating
from game_night.schemas.rating import (
    AverageRating,
    RatingCreate,
    RatingWithRater,
    SubmitRatingResult,
)
from game_night.services.enrichment import load_people
from game_night.services.game_sessions import get_session_or_404, is_confirmed_member

logger = logging.getLogger(__name__)

__all__ = [
    "submit_rating",
    "get_ratings_for_user",
    "get_average_rating_for_user",
    "get_rating_by_rater_for_session",
]

MIN_RATING = 1
MAX_RATING = 5


def _get_rating(
    db: Session, rater_id: int, rated_id: int, session_id: int
) -> UserRating | None:
    return db.scalars(
        select(UserRating).where(
            UserRating.rater_user_id == rater_id,
            UserRating.session_id == session_id,
            UserRating.rated_user_id == rated_id,
        )
    ).first()


def submit_rating(db: Session, caller: User, data: RatingCreate) -> SubmitRatingResult:
    """Create or overwrite the caller's rating of a co-player for a session.

    Both people must be the host or a confirmed participant of the session.
    """
    if caller.id == data.rated_user_id:
        raise ValidationError("Cannot rate yourself.")
    if not MIN_RATING <= data.rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}.")

    session = get_session_or_404(db, data.session_id)
    if not is_confirmed_member(db, session, caller.id):
        raise AuthorizationError("Rater did not participate in this session or is not the host.")
    if not is_confirmed_member(db, session, data.rated_user_id):
        raise ValidationError("Rated user was not part of this session.")

    existing = _get_rating(db, caller.id, data.rated_user_id, session.id)
    if existing is not None:
        existing.rating = data.rating
        existing.comment = data.comment
        db.commit()
        return SubmitRatingResult(
            success=True,
            message="Rating updated.",
            rating_id=existing.id,
            outcome="updated",
        )

    rating = UserRating(
        rated_user_id=data.rated_user_id,
        rater_user_id=caller.id,
        session_id=session.id,
        rating=data.rating,
        comment=data.comment,
    )
    db.add(rating)
    db.commit()
    db.refresh(rating)
    logger.debug("User %s rated user %s for session %s", caller.id, data.rated_user_id, session.id)
    return SubmitRatingResult(
        success=True,
        message="Rating submitted.",
        rating_id=rating.id,
        outcome="created",
    )


def get_ratings_for_user(db: Session, user_id: int) -> list[RatingWithRater]:
    """Ratings received by ``user_id``, newest first."""
    ratings = db.scalars(
        select(UserRating)
        .where(UserRating.rated_user_id == user_id)
        .order_by(UserRating.id.desc())
    ).all()
    raters = load_people(db, (r.rater_user_id for r in ratings))
    session_ids = {r.session_id for r in ratings}
    titles: dict[int, str] = {}
    if session_ids:
        rows = db.execute(
            select(GameSession.id, GameSession.title).where(GameSession.id.in_(session_ids))
        )
        titles = {session_id: title for session_id, title in rows}

    return [
        RatingWithRater(
            id=rating.id,
            rated_user_id=rating.rated_user_id,
            rater_user_id=rating.rater_user_id,
            session_id=rating.session_id,
            rating=rating.rating,
            comment=rating.comment,
            created_at=rating.created_at,
            rater_username=raters[rating.rater_user_id].username("Unknown Rater"),
            rater_display_name=raters[rating.rater_user_id].display_name("Unknown Rater"),
            session_title=titles.get(rating.session_id, "Unknown Session"),
        )
        for rating in ratings
    ]


def get_average_rating_for_user(db: Session, user_id: int) -> AverageRating:
    average, count = db.execute(
        select(func.avg(UserRating.rating), func.count(UserRating.id)).where(
            UserRating.rated_user_id == user_id
        )
    ).one()
    if not count:
        return AverageRating(average=0, count=0)
    return AverageRating(average=float(average), count=int(count))


def get_rating_by_rater_for_session(
    db: Session, caller: User | None, rated_user_id: int, session_id: int
) -> UserRating | None:
    if caller is None:
        return None
    return _get_rating(db, caller.id, rated_user_id, session_id)
