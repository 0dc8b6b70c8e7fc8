"""Follow/block graph between users.

Each ordered pair of users has at most one edge. Because the two directions
are stored independently, several edges can describe one relationship;
:func:`derive_connection_status` collapses them with a fixed precedence:
blocks first, then mutual follows, then one-way follows, then requests.
"""
from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from game_night.core.errors import (
    AuthorizationError,
    NotFoundError,
    StateError,
    ValidationError,
)
from game_night.models import User, UserConnection
from game_night.models.enums import ConnectionStatus
from game_night.schemas.auth import UserSummary
from game_night.schemas.common import ActionResult
from game_night.schemas.connection import (
    ConnectionStatusResponse,
    PendingRequestResponse,
    Requester,
)
from game_night.services.enrichment import load_people

logger = logging.getLogger(__name__)

__all__ = [
    "derive_connection_status",
    "request_connection",
    "accept_connection_request",
    "decline_or_cancel_connection_request",
    "remove_connection",
    "block_user",
    "unblock_user",
    "get_followers",
    "get_following",
    "get_pending_incoming_requests",
    "get_connection_status_with_user",
]


def _get_edge(db: Session, follower_id: int, following_id: int) -> UserConnection | None:
    return db.scalars(
        select(UserConnection).where(
            UserConnection.follower_id == follower_id,
            UserConnection.following_id == following_id,
        )
    ).first()


def _require_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


def _get_connection_or_404(db: Session, connection_id: int) -> UserConnection:
    connection = db.get(UserConnection, connection_id)
    if connection is None:
        raise NotFoundError("Connection request not found.")
    return connection


def derive_connection_status(
    caller_id: int,
    target_id: int,
    mine: UserConnection | None,
    theirs: UserConnection | None,
) -> ConnectionStatusResponse:
    """Collapse the caller->target (``mine``) and target->caller (``theirs``) edges."""
    if caller_id == target_id:
        return ConnectionStatusResponse(status="self")

    my_status = mine.status if mine is not None else None
    their_status = theirs.status if theirs is not None else None

    if my_status == ConnectionStatus.BLOCKED:
        return ConnectionStatusResponse(status="blocked_by_me", connection_id=mine.id)
    if their_status == ConnectionStatus.BLOCKED:
        return ConnectionStatusResponse(status="blocked_by_them", connection_id=theirs.id)
    if my_status == ConnectionStatus.ACCEPTED and their_status == ConnectionStatus.ACCEPTED:
        return ConnectionStatusResponse(
            status="friends",
            my_connection_id=mine.id,
            their_connection_id=theirs.id,
        )
    if my_status == ConnectionStatus.ACCEPTED:
        return ConnectionStatusResponse(status="following_them", my_connection_id=mine.id)
    if their_status == ConnectionStatus.ACCEPTED:
        return ConnectionStatusResponse(status="followed_by_them", their_connection_id=theirs.id)
    if my_status == ConnectionStatus.PENDING:
        return ConnectionStatusResponse(status="request_sent_by_me", my_connection_id=mine.id)
    if their_status == ConnectionStatus.PENDING:
        return ConnectionStatusResponse(
            status="request_received_from_them",
            their_connection_id=theirs.id,
        )
    return ConnectionStatusResponse(status="none")


def request_connection(db: Session, caller: User, following_id: int) -> ActionResult:
    """Send a follow request; repeating one is a no-op reported as unsuccessful."""
    if caller.id == following_id:
        raise ValidationError("Cannot connect with yourself.")
    _require_user(db, following_id)

    existing = _get_edge(db, caller.id, following_id)
    if existing is not None:
        if existing.status == ConnectionStatus.BLOCKED:
            raise StateError("Cannot connect with a blocked user or user who blocked you.")
        if existing.status == ConnectionStatus.PENDING:
            return ActionResult(success=False, message="Connection request already pending.")
        if existing.status == ConnectionStatus.ACCEPTED:
            return ActionResult(success=False, message="Already connected.")

    reverse = _get_edge(db, following_id, caller.id)
    if reverse is not None and reverse.status == ConnectionStatus.BLOCKED:
        raise AuthorizationError("This user has blocked you.")

    db.add(
        UserConnection(
            follower_id=caller.id,
            following_id=following_id,
            status=ConnectionStatus.PENDING.value,
        )
    )
    db.commit()
    return ActionResult(success=True, message="Connection request sent.")


def accept_connection_request(db: Session, caller: User, connection_id: int) -> ActionResult:
    connection = _get_connection_or_404(db, connection_id)
    if connection.following_id != caller.id:
        raise AuthorizationError("Not authorized to accept this request.")
    if connection.status != ConnectionStatus.PENDING:
        raise StateError("Request is not pending.")

    connection.status = ConnectionStatus.ACCEPTED.value
    db.commit()
    return ActionResult(success=True, message="Connection accepted.")


def decline_or_cancel_connection_request(
    db: Session, caller: User, connection_id: int
) -> ActionResult:
    """Either endpoint may drop a pending request; nothing records the decline."""
    connection = _get_connection_or_404(db, connection_id)
    if caller.id not in (connection.follower_id, connection.following_id):
        raise AuthorizationError("Not authorized to modify this request.")
    if connection.status != ConnectionStatus.PENDING:
        raise StateError("Request is not pending.")

    db.delete(connection)
    db.commit()
    return ActionResult(success=True, message="Connection request declined/cancelled.")


def remove_connection(db: Session, caller: User, target_user_id: int) -> ActionResult:
    """Unfollow: delete the caller's accepted edge to the target."""
    connection = _get_edge(db, caller.id, target_user_id)
    if connection is None or connection.status != ConnectionStatus.ACCEPTED:
        raise NotFoundError("No accepted connection found to remove.")

    db.delete(connection)
    db.commit()
    return ActionResult(success=True, message="Connection removed.")


def block_user(db: Session, caller: User, target_user_id: int) -> ActionResult:
    """Drop every edge between the pair, then record caller -> target as blocked."""
    if caller.id == target_user_id:
        raise ValidationError("Cannot block yourself.")
    _require_user(db, target_user_id)

    for edge in db.scalars(
        select(UserConnection).where(
            or_(
                (UserConnection.follower_id == caller.id)
                & (UserConnection.following_id == target_user_id),
                (UserConnection.follower_id == target_user_id)
                & (UserConnection.following_id == caller.id),
            )
        )
    ):
        db.delete(edge)
    # Deletes must reach the database before the unique pair is reinserted.
    db.flush()

    db.add(
        UserConnection(
            follower_id=caller.id,
            following_id=target_user_id,
            status=ConnectionStatus.BLOCKED.value,
        )
    )
    db.commit()
    logger.info("User %s blocked user %s", caller.id, target_user_id)
    return ActionResult(success=True, message="User blocked.")


def unblock_user(db: Session, caller: User, target_user_id: int) -> ActionResult:
    connection = _get_edge(db, caller.id, target_user_id)
    if connection is None or connection.status != ConnectionStatus.BLOCKED:
        raise NotFoundError("No blocked record found for this user.")

    db.delete(connection)
    db.commit()
    logger.info("User %s unblocked user %s", caller.id, target_user_id)
    return ActionResult(success=True, message="User unblocked.")


def _summaries(db: Session, user_ids: list[int]) -> list[UserSummary]:
    people = load_people(db, user_ids)
    summaries = []
    for user_id in user_ids:
        person = people[user_id]
        if person.user is None:
            continue
        summaries.append(
            UserSummary(
                id=user_id,
                name=person.user.name,
                username=person.profile.username if person.profile else None,
                display_name=person.profile.display_name if person.profile else None,
            )
        )
    return summaries


def get_followers(db: Session, user_id: int) -> list[UserSummary]:
    """Users with an accepted edge pointing at ``user_id``."""
    follower_ids = db.scalars(
        select(UserConnection.follower_id)
        .where(
            UserConnection.following_id == user_id,
            UserConnection.status == ConnectionStatus.ACCEPTED.value,
        )
        .order_by(UserConnection.id)
    ).all()
    return _summaries(db, list(follower_ids))


def get_following(db: Session, user_id: int) -> list[UserSummary]:
    """Users ``user_id`` follows with an accepted edge."""
    following_ids = db.scalars(
        select(UserConnection.following_id)
        .where(
            UserConnection.follower_id == user_id,
            UserConnection.status == ConnectionStatus.ACCEPTED.value,
        )
        .order_by(UserConnection.id)
    ).all()
    return _summaries(db, list(following_ids))


def get_pending_incoming_requests(db: Session, caller: User | None) -> list[PendingRequestResponse]:
    if caller is None:
        return []
    connections = db.scalars(
        select(UserConnection)
        .where(
            UserConnection.following_id == caller.id,
            UserConnection.status == ConnectionStatus.PENDING.value,
        )
        .order_by(UserConnection.id)
    ).all()
    requesters = load_people(db, (c.follower_id for c in connections))
    return [
        PendingRequestResponse(
            id=connection.id,
            follower_id=connection.follower_id,
            following_id=connection.following_id,
            status=connection.status,
            created_at=connection.created_at,
            requester=Requester(
                id=connection.follower_id,
                username=requesters[connection.follower_id].username("Unknown"),
                display_name=requesters[connection.follower_id].display_name("Unknown User"),
            ),
        )
        for connection in connections
    ]


def get_connection_status_with_user(
    db: Session, caller: User | None, target_user_id: int
) -> ConnectionStatusResponse | None:
    if caller is None:
        return None
    if caller.id == target_user_id:
        return ConnectionStatusResponse(status="self")
    return derive_connection_status(
        caller.id,
        target_user_id,
        _get_edge(db, caller.id, target_user_id),
        _get_edge(db, target_user_id, caller.id),
    )
