"""Per-session chat: members write, anyone can read."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from game_night.core.errors import AuthorizationError, ValidationError
from game_night.models import ChatMessage, SessionParticipant, User
from game_night.models.enums import ParticipantStatus
from game_night.schemas.chat import ChatMessageResponse
from game_night.services.enrichment import load_people
from game_night.services.game_sessions import get_session_or_404

logger = logging.getLogger(__name__)

__all__ = ["send_message", "list_messages"]


def send_message(db: Session, caller: User, session_id: int, message_text: str) -> ChatMessage:
    """Append a message to a session's chat.

    Only the host and confirmed participants may post.
    """
    if message_text.strip() == "":
        raise ValidationError("Message text cannot be empty.")

    session = get_session_or_404(db, session_id)
    participation = db.scalars(
        select(SessionParticipant).where(
            SessionParticipant.session_id == session.id,
            SessionParticipant.user_id == caller.id,
        )
    ).first()
    is_host = session.host_id == caller.id
    if participation is None and not is_host:
        raise AuthorizationError("You are not part of this game session's chat.")
    if (
        participation is not None
        and participation.status != ParticipantStatus.CONFIRMED
        and not is_host
    ):
        raise AuthorizationError("Your participation is not confirmed for this session's chat.")

    message = ChatMessage(session_id=session.id, user_id=caller.id, message_text=message_text)
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.debug("User %s posted message %s in session %s", caller.id, message.id, session.id)
    return message


def list_messages(db: Session, session_id: int, caller: User | None) -> list[ChatMessageResponse]:
    """Messages oldest first; ``is_own_message`` is relative to ``caller``."""
    messages = db.scalars(
        select(ChatMessage)
        .where(ChatMessage.session_id == session_id)
        .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
    ).all()
    authors = load_people(db, (m.user_id for m in messages))
    caller_id = caller.id if caller is not None else None

    return [
        ChatMessageResponse(
            id=message.id,
            session_id=message.session_id,
            user_id=message.user_id,
            message_text=message.message_text,
            created_at=message.created_at,
            author_username=authors[message.user_id].username("Unknown"),
            author_display_name=authors[message.user_id].display_name("User"),
            author_profile_image_url=authors[message.user_id].profile_image_url,
            is_own_message=message.user_id == caller_id,
        )
        for message in messages
    ]
