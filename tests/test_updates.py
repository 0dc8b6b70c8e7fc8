"""Tests for tagged partial updates and the PATCH body base model."""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from game_night.schemas.game_session import GameSessionUpdate
from game_night.schemas.profile import ProfileUpdateRequest
from game_night.services.updates import FieldUpdate, UpdateKind, apply_updates, get_update


def test_field_update_apply() -> None:
    assert FieldUpdate.unchanged().apply("old") == "old"
    assert FieldUpdate.set("new").apply("old") == "new"
    assert FieldUpdate.cleared().apply("old") is None


def test_get_update_defaults_to_unchanged() -> None:
    assert get_update({}, "title").kind is UpdateKind.UNCHANGED


def test_apply_updates_skips_unchanged_fields() -> None:
    target = SimpleNamespace(title="Catan", description="bring snacks", meeting_point="Cafe")
    written = apply_updates(
        target,
        {
            "title": FieldUpdate.set("Azul"),
            "description": FieldUpdate.cleared(),
            "meeting_point": FieldUpdate.unchanged(),
        },
    )
    assert written == ["title", "description"]
    assert target.title == "Azul"
    assert target.description is None
    assert target.meeting_point == "Cafe"


def test_patch_model_distinguishes_absent_null_and_value() -> None:
    body = GameSessionUpdate.model_validate({"title": "Azul", "description": None})
    updates = body.to_updates()

    assert updates["title"] == FieldUpdate.set("Azul")
    assert updates["description"] == FieldUpdate.cleared()
    assert updates["meeting_point"].is_unchanged


def test_patch_model_rejects_null_for_required_field() -> None:
    with pytest.raises(ValidationError):
        GameSessionUpdate.model_validate({"title": None})


def test_profile_fields_are_all_clearable() -> None:
    updates = ProfileUpdateRequest.model_validate({"bio": None, "username": None}).to_updates()
    assert updates["bio"].kind is UpdateKind.CLEARED
    assert updates["username"].kind is UpdateKind.CLEARED
