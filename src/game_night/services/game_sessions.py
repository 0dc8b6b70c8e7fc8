"""Game session lifecycle and roster management.

Status transitions::

    open <-> full           automatic as confirmed seats fill and empty
    open|full|in_progress -> cancelled   host only
    open|full|in_progress -> completed   host only

``in_progress`` exists in the data model but no operation enters it yet.
The host holds a confirmed seat from creation and counts towards
``max_players``.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from game_night.core.errors import (
    AuthorizationError,
    CapacityError,
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from game_night.core.settings import settings
from game_night.db.time import now_ms, utcnow
from game_night.models import GameSession, SessionParticipant, User
from game_night.models.enums import TERMINAL_SESSION_STATUSES, ParticipantStatus, SessionStatus
from game_night.schemas.common import ActionResult
from game_night.schemas.game_session import (
    GameSessionCreate,
    GameSessionResponse,
    ParticipantResponse,
)
from game_night.services.enrichment import load_people
from game_night.services.files import require_file, resolve_file_urls
from game_night.services.profiles import get_profile
from game_night.services.updates import Updates, apply_updates, get_update

logger = logging.getLogger(__name__)

__all__ = [
    "get_session_or_404",
    "confirmed_count",
    "is_confirmed_member",
    "create_game_session",
    "update_game_session",
    "join_session",
    "leave_session",
    "cancel_session",
    "complete_session",
    "list_open_game_sessions",
    "get_game_session",
]

_ACTIVE_PARTICIPANT_STATUSES = (
    ParticipantStatus.CONFIRMED.value,
    ParticipantStatus.PENDING_APPROVAL.value,
)


def get_session_or_404(db: Session, session_id: int) -> GameSession:
    session = db.get(GameSession, session_id)
    if session is None:
        raise NotFoundError("Game session not found.")
    return session


def _get_participation(db: Session, session_id: int, user_id: int) -> SessionParticipant | None:
    return db.scalars(
        select(SessionParticipant).where(
            SessionParticipant.session_id == session_id,
            SessionParticipant.user_id == user_id,
        )
    ).first()


def confirmed_count(db: Session, session_id: int) -> int:
    """Number of confirmed seats, host included."""
    return db.scalar(
        select(func.count())
        .select_from(SessionParticipant)
        .where(
            SessionParticipant.session_id == session_id,
            SessionParticipant.status == ParticipantStatus.CONFIRMED.value,
        )
    ) or 0


def is_confirmed_member(db: Session, session: GameSession, user_id: int) -> bool:
    """True for the host and for confirmed participants."""
    if session.host_id == user_id:
        return True
    participation = _get_participation(db, session.id, user_id)
    return participation is not None and participation.status == ParticipantStatus.CONFIRMED


def _require_host(session: GameSession, caller: User, action: str) -> None:
    if session.host_id != caller.id:
        raise AuthorizationError(f"Only the host can {action}.")


def _validate_schedule(scheduled_timestamp: int | None) -> None:
    if scheduled_timestamp is not None and scheduled_timestamp <= now_ms():
        raise ValidationError("Scheduled date and time must be in the future.")


def _validate_max_players(max_players: int | None) -> None:
    if max_players is not None and max_players <= 0:
        raise ValidationError("Maximum players must be a positive number.")


def create_game_session(db: Session, caller: User, data: GameSessionCreate) -> GameSession:
    """Host a new session and seat the host as its first confirmed player.

    Raises:
        ValidationError: If the host profile is incomplete, the time is not in
            the future or ``max_players`` is not positive.
    """
    profile = get_profile(db, caller.id)
    if profile is None:
        raise ValidationError("User profile not found. Please complete your profile first.")
    if not profile.can_host:
        raise ValidationError("Profile is incomplete. Please ensure username and location are set.")
    _validate_max_players(data.max_players)
    _validate_schedule(data.scheduled_timestamp)
    require_file(db, data.image_id)

    duration = data.duration_hours
    if duration is None:
        duration = settings.default_session_duration_hours

    session = GameSession(
        host_id=caller.id,
        title=data.title,
        description=data.description,
        location_city=data.location_city,
        location_region=data.location_region,
        location_country=data.location_country,
        meeting_point=data.meeting_point,
        scheduled_timestamp=data.scheduled_timestamp,
        duration_hours=duration,
        max_players=data.max_players,
        difficulty_level=data.difficulty_level,
        special_rules=data.special_rules,
        status=SessionStatus.OPEN.value,
        image_id=data.image_id,
    )
    db.add(session)
    db.flush()
    db.add(
        SessionParticipant(
            session_id=session.id,
            user_id=caller.id,
            status=ParticipantStatus.CONFIRMED.value,
            joined_at=utcnow(),
        )
    )
    db.commit()
    db.refresh(session)
    logger.info("User %s created game session %s", caller.id, session.id)
    return session


def update_game_session(db: Session, caller: User, session_id: int, updates: Updates) -> bool:
    """Apply a partial update while the session is still open.

    Lowering ``max_players`` to the current confirmed count marks the session
    full; lowering it below that count is rejected.
    """
    session = get_session_or_404(db, session_id)
    _require_host(session, caller, "update the game session")
    if session.status != SessionStatus.OPEN:
        raise StateError("Cannot update a session that is not 'open'.")

    scheduled = get_update(updates, "scheduled_timestamp")
    if scheduled.is_set:
        _validate_schedule(scheduled.value)

    max_players = get_update(updates, "max_players")
    seats_taken = None
    if max_players.is_set:
        _validate_max_players(max_players.value)
        seats_taken = confirmed_count(db, session.id)
        if max_players.value < seats_taken:
            raise ValidationError(
                f"Maximum players cannot be lower than the {seats_taken} confirmed players."
            )

    image = get_update(updates, "image_id")
    if image.is_set:
        require_file(db, image.value)

    apply_updates(session, updates)
    if seats_taken is not None and seats_taken >= session.max_players:
        session.status = SessionStatus.FULL.value
        logger.info("Game session %s is now full after resize", session.id)
    db.commit()
    return True


def join_session(db: Session, caller: User, session_id: int) -> ActionResult:
    """Take a confirmed seat; the last free seat flips the session to full.

    Raises:
        CapacityError: If no seat is free.
        StateError: If the session is not accepting players.
        ConflictError: If the caller hosts or already joined the session.
    """
    session = get_session_or_404(db, session_id)
    if session.status == SessionStatus.FULL:
        raise CapacityError("This session is full.")
    if session.status != SessionStatus.OPEN:
        raise StateError("This session is not open for new participants.")
    if session.host_id == caller.id:
        raise ConflictError("You cannot join your own session.")

    participation = _get_participation(db, session.id, caller.id)
    if participation is not None:
        if participation.status == ParticipantStatus.CONFIRMED:
            raise ConflictError("You are already a participant in this session.")
        if participation.status == ParticipantStatus.PENDING_APPROVAL:
            raise ConflictError("You have already requested to join this session.")

    seats_taken = confirmed_count(db, session.id)
    if seats_taken >= session.max_players:
        raise CapacityError("This session is full.")

    if participation is None:
        db.add(
            SessionParticipant(
                session_id=session.id,
                user_id=caller.id,
                status=ParticipantStatus.CONFIRMED.value,
                joined_at=utcnow(),
            )
        )
    else:
        # Reuse a declined/withdrawn seat record so the pair stays unique.
        participation.status = ParticipantStatus.CONFIRMED.value
        participation.joined_at = utcnow()

    if seats_taken + 1 >= session.max_players:
        session.status = SessionStatus.FULL.value
        logger.info("Game session %s is now full", session.id)
    db.commit()
    return ActionResult(success=True, message="Successfully joined the session!")


def leave_session(db: Session, caller: User, session_id: int) -> ActionResult:
    """Give up a seat; a full session reopens."""
    session = get_session_or_404(db, session_id)
    if session.host_id == caller.id:
        raise AuthorizationError("Host cannot leave their own session. Cancel the session instead.")
    if session.status in TERMINAL_SESSION_STATUSES:
        raise StateError("Cannot leave a completed or cancelled session.")

    participation = _get_participation(db, session.id, caller.id)
    if participation is None:
        raise NotFoundError("You are not a participant in this session.")

    db.delete(participation)
    if session.status == SessionStatus.FULL:
        session.status = SessionStatus.OPEN.value
        logger.info("Game session %s reopened", session.id)
    db.commit()
    return ActionResult(success=True, message="Successfully left the session.")


def cancel_session(db: Session, caller: User, session_id: int) -> ActionResult:
    session = get_session_or_404(db, session_id)
    _require_host(session, caller, "cancel the session")
    if session.status in TERMINAL_SESSION_STATUSES:
        raise StateError("Session is already completed or cancelled.")

    session.status = SessionStatus.CANCELLED.value
    db.commit()
    logger.info("Game session %s cancelled by host", session.id)
    return ActionResult(success=True, message="Session cancelled successfully.")


def complete_session(db: Session, caller: User, session_id: int) -> ActionResult:
    session = get_session_or_404(db, session_id)
    _require_host(session, caller, "mark the session as completed")
    if session.status == SessionStatus.COMPLETED:
        raise StateError("Session is already marked as completed.")
    if session.status == SessionStatus.CANCELLED:
        raise StateError("Cannot complete a cancelled session.")

    session.status = SessionStatus.COMPLETED.value
    db.commit()
    logger.info("Game session %s completed", session.id)
    return ActionResult(success=True, message="Session marked as completed.")


def _enrich(db: Session, sessions: Sequence[GameSession]) -> list[GameSessionResponse]:
    if not sessions:
        return []
    session_ids = [s.id for s in sessions]
    roster: dict[int, list[SessionParticipant]] = defaultdict(list)
    for participant in db.scalars(
        select(SessionParticipant)
        .where(SessionParticipant.session_id.in_(session_ids))
        .order_by(SessionParticipant.id)
    ):
        roster[participant.session_id].append(participant)

    hosts = load_people(db, (s.host_id for s in sessions))
    images = resolve_file_urls(db, (s.image_id for s in sessions))

    enriched: list[GameSessionResponse] = []
    for session in sessions:
        host = hosts[session.host_id]
        participants = roster[session.id]
        enriched.append(
            GameSessionResponse(
                id=session.id,
                host_id=session.host_id,
                title=session.title,
                description=session.description,
                location_city=session.location_city,
                location_region=session.location_region,
                location_country=session.location_country,
                meeting_point=session.meeting_point,
                scheduled_timestamp=session.scheduled_timestamp,
                duration_hours=session.duration_hours,
                max_players=session.max_players,
                difficulty_level=session.difficulty_level,
                special_rules=session.special_rules,
                status=session.status,
                image_id=session.image_id,
                created_at=session.created_at,
                host_display_name=host.display_name("Unknown Host"),
                host_username=host.username("unknown_host", use_user_name=False),
                host_profile_image_url=host.profile_image_url,
                current_players=sum(
                    1 for p in participants if p.status == ParticipantStatus.CONFIRMED
                ),
                participants=[ParticipantResponse.model_validate(p) for p in participants],
                image_url=images.get(session.image_id) if session.image_id else None,
            )
        )
    return enriched


def list_open_game_sessions(db: Session) -> list[GameSessionResponse]:
    """Open sessions scheduled in the future, soonest first."""
    sessions = db.scalars(
        select(GameSession)
        .where(
            GameSession.status == SessionStatus.OPEN.value,
            GameSession.scheduled_timestamp > now_ms(),
        )
        .order_by(GameSession.scheduled_timestamp.asc(), GameSession.id.asc())
    ).all()
    return _enrich(db, sessions)


def get_game_session(db: Session, session_id: int) -> GameSessionResponse:
    """One session in any status, enriched like the open listing."""
    return _enrich(db, [get_session_or_404(db, session_id)])[0]
