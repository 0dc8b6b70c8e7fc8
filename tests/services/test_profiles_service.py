"""Tests for profile reads and updates."""

import pytest

from game_night.core.errors import ConflictError, NotFoundError
from game_night.schemas.profile import ProfileUpdateRequest
from game_night.services import profiles


def _update(db_session, user, **body):
    return profiles.update_my_profile(
        db_session, user, ProfileUpdateRequest.model_validate(body).to_updates()
    )


def test_first_update_creates_profile(db_session, test_user) -> None:
    assert profiles.get_my_profile(db_session, test_user) is None

    result = _update(db_session, test_user, username="meeple", location_city="Nantes")

    assert result.id is not None
    assert result.username == "meeple"
    assert result.is_complete is False
    assert profiles.get_my_profile(db_session, test_user).username == "meeple"


def test_complete_profile(db_session, test_user) -> None:
    result = _update(
        db_session,
        test_user,
        username="meeple",
        location_city="Nantes",
        location_region="Pays de la Loire",
        location_country="France",
    )
    assert result.is_complete is True


def test_omitted_fields_untouched_and_null_clears(db_session, test_user, make_profile) -> None:
    make_profile(test_user, bio="Loves worker placement")

    result = _update(db_session, test_user, display_name="New Name")
    assert result.bio == "Loves worker placement"

    result = _update(db_session, test_user, bio=None)
    assert result.bio is None
    assert result.display_name == "New Name"


def test_username_taken(db_session, test_user, other_user, make_profile) -> None:
    make_profile(other_user, username="taken")
    with pytest.raises(ConflictError, match="Username already taken"):
        _update(db_session, test_user, username="taken")


def test_keeping_own_username_is_fine(db_session, test_user, make_profile) -> None:
    make_profile(test_user, username="mine")
    assert _update(db_session, test_user, username="mine").username == "mine"


def test_blank_username_stored_as_null(db_session, test_user, other_user) -> None:
    assert _update(db_session, test_user, username="").username is None
    assert _update(db_session, other_user, username="  ").username is None


def test_unknown_profile_image(db_session, test_user) -> None:
    with pytest.raises(NotFoundError):
        _update(db_session, test_user, profile_image_id="nope")


def test_profile_image_url(db_session, test_user, stored_file) -> None:
    result = _update(db_session, test_user, profile_image_id=stored_file.id)
    assert result.profile_image_url.endswith(f"/api/v1/files/{stored_file.id}")


def test_user_profile_falls_back_to_account(db_session, test_user) -> None:
    result = profiles.get_user_profile(db_session, test_user.id)
    assert result.id is None
    assert result.user_id == test_user.id
    assert result.username == "Test User"
    assert result.profile_image_url is None


def test_user_profile_missing_user(db_session) -> None:
    with pytest.raises(NotFoundError):
        profiles.get_user_profile(db_session, 12345)


def test_signed_out_profile(db_session) -> None:
    assert profiles.get_my_profile(db_session, None) is None
