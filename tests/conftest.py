# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from game_night.core.security import create_access_token, create_upload_token, hash_password
from game_night.core.settings import settings
from game_night.db.session import Base, build_engine, create_tables, drop_tables, make_sessionmaker
from game_night.db.session import get_db as app_get_session
from game_night.db.time import now_ms
from game_night.main import app as fastapi_app
from game_night.models import GameSession, Profile, StoredFile, User
from game_night.schemas.game_session import GameSessionCreate
from game_night.services import files, game_sessions

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery"
HOUR_MS = 60 * 60 * 1000

# Hashing is deliberately slow; hash once and share it across fixture users.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)
_EMAIL_COUNTER = count(1)


def future_ms(hours: float = 24) -> int:
    """Epoch milliseconds ``hours`` from now."""
    return now_ms() + int(hours * HOUR_MS)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    session = make_sessionmaker(engine, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so every test empties the tables afterwards.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def storage_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep uploaded blobs inside the test's temporary directory."""
    directory = tmp_path / "storage"
    monkeypatch.setattr(settings, "storage_dir", directory)
    return directory


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting a user with the shared test password."""

    def _make_user(name: str | None = "Player", email: str | None = None) -> User:
        user = User(
            email=email or f"player{next(_EMAIL_COUNTER)}@example.com",
            name=name,
            password_hash=_PASSWORD_HASH,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_profile(db_session: Session) -> Callable[..., Profile]:
    """Factory persisting a profile; defaults make the owner able to host."""

    def _make_profile(user: User, **fields: Any) -> Profile:
        values: dict[str, Any] = {
            "username": f"user{user.id}",
            "display_name": f"Display {user.id}",
            "location_city": "Lyon",
            "location_region": "Auvergne-Rhone-Alpes",
            "location_country": "France",
        }
        values.update(fields)
        profile = Profile(user_id=user.id, **values)
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile

    return _make_profile


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Primary test user."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Secondary test user."""
    return make_user("Other User")


@pytest.fixture()
def third_user(make_user: Callable[..., User]) -> User:
    return make_user("Third User")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def third_auth_token(third_user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(third_user.id)}"}


@pytest.fixture()
def host_profile(make_profile: Callable[..., Profile], test_user: User) -> Profile:
    """Profile that lets ``test_user`` host sessions."""
    return make_profile(test_user, username="hostess", display_name="The Host")


@pytest.fixture()
def make_session(db_session: Session) -> Callable[..., GameSession]:
    """Factory creating a session through the service so the host is seated."""

    def _make_session(host: User, **fields: Any) -> GameSession:
        values: dict[str, Any] = {
            "title": "Catan night",
            "location_city": "Lyon",
            "location_region": "Auvergne-Rhone-Alpes",
            "location_country": "France",
            "scheduled_timestamp": future_ms(),
            "max_players": 3,
        }
        values.update(fields)
        return game_sessions.create_game_session(db_session, host, GameSessionCreate(**values))

    return _make_session


@pytest.fixture()
def game_session(
    make_session: Callable[..., GameSession],
    test_user: User,
    host_profile: Profile,
) -> GameSession:
    """Open three-seat session hosted by ``test_user``."""
    return make_session(test_user)


@pytest.fixture()
def stored_file(db_session: Session, test_user: User) -> StoredFile:
    """A small PNG-ish blob uploaded by ``test_user``."""
    token = create_upload_token(test_user.id, "a" * 32)
    return files.store_upload(db_session, token, b"\x89PNG fake image", "image/png")


@pytest.fixture()
def test_password() -> str:
    """Plain-text password shared by every fixture user."""
    return TEST_PASSWORD
