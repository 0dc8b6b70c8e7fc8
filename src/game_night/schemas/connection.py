"""Connection graph schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from game_night.models.enums import ConnectionStatus

DerivedStatus = Literal[
    "self",
    "blocked_by_me",
    "blocked_by_them",
    "friends",
    "following_them",
    "followed_by_them",
    "request_sent_by_me",
    "request_received_from_them",
    "none",
]


class ConnectionRequestCreate(BaseModel):
    following_id: int


class ConnectionResponse(BaseModel):
    id: int
    follower_id: int
    following_id: int
    status: ConnectionStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Requester(BaseModel):
    id: int
    username: str
    display_name: str


class PendingRequestResponse(ConnectionResponse):
    """Incoming request with the requester's display details."""

    requester: Requester


class ConnectionStatusResponse(BaseModel):
    """Relationship between the caller and another user."""

    status: DerivedStatus
    connection_id: int | None = None
    my_connection_id: int | None = None
    their_connection_id: int | None = None
