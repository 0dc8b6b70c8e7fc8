"""Game session and session chat endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from game_night.schemas.chat import ChatMessageCreate, ChatMessageResponse
from game_night.schemas.common import ActionResult
from game_night.schemas.game_session import (
    GameSessionCreate,
    GameSessionResponse,
    GameSessionUpdate,
    SessionCreated,
)
from game_night.services import chat, game_sessions

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep

router = APIRouter(prefix="/sessions", tags=["game sessions"])


@router.post("/", response_model=SessionCreated, status_code=status.HTTP_201_CREATED)
async def create_game_session(
    payload: GameSessionCreate,
    caller: CurrentUserDep,
    db: SessionDep,
) -> SessionCreated:
    """Host a new session; the host takes the first seat."""
    session = game_sessions.create_game_session(db, caller, payload)
    return SessionCreated(id=session.id)


@router.get("/open", response_model=list[GameSessionResponse])
async def list_open_game_sessions(db: SessionDep) -> list[GameSessionResponse]:
    """Open sessions in the future, soonest first."""
    return game_sessions.list_open_game_sessions(db)


@router.get("/{session_id}", response_model=GameSessionResponse)
async def get_game_session(session_id: int, db: SessionDep) -> GameSessionResponse:
    return game_sessions.get_game_session(db, session_id)


@router.patch("/{session_id}", response_model=bool)
async def update_game_session(
    session_id: int,
    payload: GameSessionUpdate,
    caller: CurrentUserDep,
    db: SessionDep,
) -> bool:
    """Edit an open session; send ``null`` to clear an optional field."""
    return game_sessions.update_game_session(db, caller, session_id, payload.to_updates())


@router.post("/{session_id}/join", response_model=ActionResult)
async def join_session(session_id: int, caller: CurrentUserDep, db: SessionDep) -> ActionResult:
    return game_sessions.join_session(db, caller, session_id)


@router.post("/{session_id}/leave", response_model=ActionResult)
async def leave_session(session_id: int, caller: CurrentUserDep, db: SessionDep) -> ActionResult:
    return game_sessions.leave_session(db, caller, session_id)


@router.post("/{session_id}/cancel", response_model=ActionResult)
async def cancel_session(session_id: int, caller: CurrentUserDep, db: SessionDep) -> ActionResult:
    return game_sessions.cancel_session(db, caller, session_id)


@router.post("/{session_id}/complete", response_model=ActionResult)
async def complete_session(
    session_id: int,
    caller: CurrentUserDep,
    db: SessionDep,
) -> ActionResult:
    return game_sessions.complete_session(db, caller, session_id)


@router.post("/{session_id}/messages", response_model=bool, status_code=status.HTTP_201_CREATED)
async def send_message_to_session_chat(
    session_id: int,
    payload: ChatMessageCreate,
    caller: CurrentUserDep,
    db: SessionDep,
) -> bool:
    """Post to the session chat as the host or a confirmed participant."""
    chat.send_message(db, caller, session_id, payload.message_text)
    return True


@router.get("/{session_id}/messages", response_model=list[ChatMessageResponse])
async def list_messages_for_session(
    session_id: int,
    db: SessionDep,
    caller: OptionalUserDep,
) -> list[ChatMessageResponse]:
    """Chat history, oldest first."""
    return chat.list_messages(db, session_id, caller)
