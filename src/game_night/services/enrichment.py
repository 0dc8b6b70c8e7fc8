"""Batched lookups attaching author/host display details to rows.

Rows that reference users (sessions, messages, posts, ratings, requests)
are enriched with one users query, one profiles query and one file query
per batch instead of several lookups per row.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from game_night.models import Profile, User
from game_night.services.files import resolve_file_urls


@dataclass(frozen=True)
class Person:
    """A user as other people see them."""

    user_id: int
    user: User | None
    profile: Profile | None
    profile_image_url: str | None

    @property
    def user_name(self) -> str | None:
        return self.user.name if self.user is not None else None

    def username(self, fallback: str, *, use_user_name: bool = True) -> str:
        """Profile username, then the account name, then ``fallback``."""
        if self.profile is not None and self.profile.username is not None:
            return self.profile.username
        if use_user_name and self.user_name is not None:
            return self.user_name
        return fallback

    def display_name(self, fallback: str) -> str:
        """Profile display name, then the account name, then ``fallback``."""
        if self.profile is not None and self.profile.display_name is not None:
            return self.profile.display_name
        if self.user_name is not None:
            return self.user_name
        return fallback


def load_people(db: Session, user_ids: Iterable[int]) -> dict[int, Person]:
    """Return a :class:`Person` for every requested id, missing users included."""
    ids = set(user_ids)
    if not ids:
        return {}
    users = {u.id: u for u in db.scalars(select(User).where(User.id.in_(ids)))}
    profiles = {p.user_id: p for p in db.scalars(select(Profile).where(Profile.user_id.in_(ids)))}
    urls = resolve_file_urls(db, (p.profile_image_id for p in profiles.values()))

    people: dict[int, Person] = {}
    for user_id in ids:
        profile = profiles.get(user_id)
        image_id = profile.profile_image_id if profile is not None else None
        people[user_id] = Person(
            user_id=user_id,
            user=users.get(user_id),
            profile=profile,
            profile_image_url=urls.get(image_id) if image_id else None,
        )
    return people


def load_person(db: Session, user_id: int) -> Person:
    return load_people(db, [user_id])[user_id]
