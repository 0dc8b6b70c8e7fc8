"""Follow, request and block endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from game_night.schemas.auth import UserSummary
from game_night.schemas.common import ActionResult
from game_night.schemas.connection import (
    ConnectionRequestCreate,
    ConnectionStatusResponse,
    PendingRequestResponse,
)
from game_night.services import connections

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/connections", tags=["connections"])


@router.post("/requests", response_model=ActionResult)
async def request_connection(
    payload: ConnectionRequestCreate,
    caller: CurrentUserDep,
    db: SessionDep,
) -> ActionResult:
    return connections.request_connection(db, caller, payload.following_id)


@router.get("/requests/incoming", response_model=list[PendingRequestResponse])
async def get_pending_incoming_requests(
    db: SessionDep,
    caller: OptionalUserDep,
) -> list[PendingRequestResponse]:
    return connections.get_pending_incoming_requests(db, caller)


@router.post("/{connection_id}/accept", response_model=ActionResult)
async def accept_connection_request(
    connection_id: int,
    caller: CurrentUserDep,
    db: SessionDep,
) -> ActionResult:
    return connections.accept_connection_request(db, caller, connection_id)


@router.delete("/{connection_id}", response_model=ActionResult)
async def decline_or_cancel_connection_request(
    connection_id: int,
    caller: CurrentUserDep,
    db: SessionDep,
) -> ActionResult:
    """Decline an incoming request or withdraw an outgoing one."""
    return connections.decline_or_cancel_connection_request(db, caller, connection_id)


@router.delete("/users/{target_user_id}", response_model=ActionResult)
async def remove_connection(
    target_user_id: int,
    caller: CurrentUserDep,
    db: SessionDep,
) -> ActionResult:
    """Unfollow a user."""
    return connections.remove_connection(db, caller, target_user_id)


@router.post("/users/{target_user_id}/block", response_model=ActionResult)
async def block_user(target_user_id: int, caller: CurrentUserDep, db: SessionDep) -> ActionResult:
    return connections.block_user(db, caller, target_user_id)


@router.delete("/users/{target_user_id}/block", response_model=ActionResult)
async def unblock_user(
    target_user_id: int,
    caller: CurrentUserDep,
    db: SessionDep,
) -> ActionResult:
    return connections.unblock_user(db, caller, target_user_id)


@router.get("/users/{user_id}/followers", response_model=list[UserSummary])
async def get_followers(user_id: int, db: SessionDep) -> list[UserSummary]:
    return connections.get_followers(db, user_id)


@router.get("/users/{user_id}/following", response_model=list[UserSummary])
async def get_following(user_id: int, db: SessionDep) -> list[UserSummary]:
    return connections.get_following(db, user_id)


@router.get("/users/{target_user_id}/status", response_model=ConnectionStatusResponse | None)
async def get_connection_status_with_user(
    target_user_id: int,
    db: SessionDep,
    caller: OptionalUserDep,
) -> ConnectionStatusResponse | None:
    """How the caller relates to another user; ``null`` when signed out."""
    return connections.get_connection_status_with_user(db, caller, target_user_id)
