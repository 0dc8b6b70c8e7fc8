"""Tests for the game session lifecycle service."""

import pytest

from game_night.core.errors import (
    AuthorizationError,
    CapacityError,
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from game_night.db.time import now_ms
from game_night.models import SessionParticipant
from game_night.models.enums import ParticipantStatus, SessionStatus
from game_night.schemas.game_session import GameSessionCreate, GameSessionUpdate
from game_night.services import game_sessions
from game_night.services.updates import FieldUpdate


def future_ms(hours: float = 24) -> int:
    return now_ms() + int(hours * 60 * 60 * 1000)


def _create_payload(**overrides):
    values = {
        "title": "Wingspan",
        "location_city": "Lyon",
        "location_region": "ARA",
        "location_country": "France",
        "scheduled_timestamp": future_ms(),
        "max_players": 4,
    }
    values.update(overrides)
    return GameSessionCreate(**values)


def test_create_seats_host_and_defaults_duration(db_session, test_user, host_profile) -> None:
    session = game_sessions.create_game_session(db_session, test_user, _create_payload())

    assert session.status == SessionStatus.OPEN
    assert session.duration_hours == 3
    assert game_sessions.confirmed_count(db_session, session.id) == 1
    assert game_sessions.is_confirmed_member(db_session, session, test_user.id)


def test_create_requires_profile(db_session, test_user) -> None:
    with pytest.raises(ValidationError, match="profile"):
        game_sessions.create_game_session(db_session, test_user, _create_payload())


def test_create_requires_username_and_city(db_session, test_user, make_profile) -> None:
    make_profile(test_user, location_city=None)
    with pytest.raises(ValidationError, match="incomplete"):
        game_sessions.create_game_session(db_session, test_user, _create_payload())


@pytest.mark.parametrize("max_players", [0, -2])
def test_create_rejects_non_positive_capacity(
    db_session, test_user, host_profile, max_players
) -> None:
    with pytest.raises(ValidationError):
        game_sessions.create_game_session(
            db_session, test_user, _create_payload(max_players=max_players)
        )


def test_create_rejects_past_time(db_session, test_user, host_profile) -> None:
    with pytest.raises(ValidationError, match="future"):
        game_sessions.create_game_session(
            db_session, test_user, _create_payload(scheduled_timestamp=future_ms(-1))
        )


def test_create_rejects_unknown_image(db_session, test_user, host_profile) -> None:
    with pytest.raises(NotFoundError):
        game_sessions.create_game_session(
            db_session, test_user, _create_payload(image_id="missing")
        )


def test_join_fills_last_seat(db_session, game_session, other_user, third_user) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)
    assert game_session.status == SessionStatus.OPEN

    result = game_sessions.join_session(db_session, third_user, game_session.id)

    assert result.success is True
    assert game_session.status == SessionStatus.FULL
    assert game_sessions.confirmed_count(db_session, game_session.id) == 3


def test_join_full_session_is_capacity_error(
    db_session, game_session, other_user, third_user, make_user
) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)
    game_sessions.join_session(db_session, third_user, game_session.id)

    with pytest.raises(CapacityError):
        game_sessions.join_session(db_session, make_user("Late"), game_session.id)


def test_join_twice_conflicts(db_session, game_session, other_user) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)
    with pytest.raises(ConflictError):
        game_sessions.join_session(db_session, other_user, game_session.id)


def test_host_cannot_join_own_session(db_session, game_session, test_user) -> None:
    with pytest.raises(ConflictError):
        game_sessions.join_session(db_session, test_user, game_session.id)


def test_join_cancelled_session_is_state_error(db_session, game_session, test_user, other_user) -> None:
    game_sessions.cancel_session(db_session, test_user, game_session.id)
    with pytest.raises(StateError):
        game_sessions.join_session(db_session, other_user, game_session.id)


def test_join_missing_session(db_session, other_user) -> None:
    with pytest.raises(NotFoundError):
        game_sessions.join_session(db_session, other_user, 4242)


def test_join_reuses_declined_record(db_session, game_session, other_user) -> None:
    db_session.add(
        SessionParticipant(
            session_id=game_session.id,
            user_id=other_user.id,
            status=ParticipantStatus.DECLINED.value,
        )
    )
    db_session.commit()

    game_sessions.join_session(db_session, other_user, game_session.id)

    rows = db_session.query(SessionParticipant).filter_by(
        session_id=game_session.id, user_id=other_user.id
    ).all()
    assert len(rows) == 1
    assert rows[0].status == ParticipantStatus.CONFIRMED


def test_leave_reopens_full_session(db_session, game_session, other_user, third_user) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)
    game_sessions.join_session(db_session, third_user, game_session.id)
    assert game_session.status == SessionStatus.FULL

    game_sessions.leave_session(db_session, third_user, game_session.id)

    assert game_session.status == SessionStatus.OPEN
    assert game_sessions.confirmed_count(db_session, game_session.id) == 2


def test_leave_open_session_keeps_status(db_session, game_session, other_user) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)
    assert game_session.status == SessionStatus.OPEN

    game_sessions.leave_session(db_session, other_user, game_session.id)

    assert game_session.status == SessionStatus.OPEN
    assert game_sessions.confirmed_count(db_session, game_session.id) == 1


def test_host_cannot_leave(db_session, game_session, test_user) -> None:
    with pytest.raises(AuthorizationError):
        game_sessions.leave_session(db_session, test_user, game_session.id)


def test_leave_without_seat(db_session, game_session, other_user) -> None:
    with pytest.raises(NotFoundError):
        game_sessions.leave_session(db_session, other_user, game_session.id)


def test_leave_completed_session(db_session, game_session, test_user, other_user) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)
    game_sessions.complete_session(db_session, test_user, game_session.id)
    with pytest.raises(StateError):
        game_sessions.leave_session(db_session, other_user, game_session.id)


def test_cancel_and_complete_are_host_only(db_session, game_session, other_user) -> None:
    with pytest.raises(AuthorizationError):
        game_sessions.cancel_session(db_session, other_user, game_session.id)
    with pytest.raises(AuthorizationError):
        game_sessions.complete_session(db_session, other_user, game_session.id)


def test_terminal_states_are_final(db_session, game_session, test_user) -> None:
    game_sessions.cancel_session(db_session, test_user, game_session.id)
    with pytest.raises(StateError):
        game_sessions.cancel_session(db_session, test_user, game_session.id)
    with pytest.raises(StateError):
        game_sessions.complete_session(db_session, test_user, game_session.id)


def test_complete_twice(db_session, game_session, test_user) -> None:
    game_sessions.complete_session(db_session, test_user, game_session.id)
    with pytest.raises(StateError, match="already"):
        game_sessions.complete_session(db_session, test_user, game_session.id)


def test_update_by_host_clears_optional_field(db_session, test_user, host_profile, make_session) -> None:
    session = make_session(test_user, description="Bring dice")
    updates = GameSessionUpdate.model_validate(
        {"title": "Catan: Seafarers", "description": None}
    ).to_updates()

    assert game_sessions.update_game_session(db_session, test_user, session.id, updates) is True
    assert session.title == "Catan: Seafarers"
    assert session.description is None


def test_update_by_non_host(db_session, game_session, other_user) -> None:
    with pytest.raises(AuthorizationError):
        game_sessions.update_game_session(
            db_session, other_user, game_session.id, {"title": FieldUpdate.set("Mine")}
        )


def test_update_only_while_open(db_session, game_session, test_user) -> None:
    game_sessions.cancel_session(db_session, test_user, game_session.id)
    with pytest.raises(StateError):
        game_sessions.update_game_session(
            db_session, test_user, game_session.id, {"title": FieldUpdate.set("Late edit")}
        )


def test_update_rejects_past_time(db_session, game_session, test_user) -> None:
    with pytest.raises(ValidationError):
        game_sessions.update_game_session(
            db_session,
            test_user,
            game_session.id,
            {"scheduled_timestamp": FieldUpdate.set(future_ms(-2))},
        )


def test_update_rejects_non_positive_capacity(db_session, game_session, test_user) -> None:
    with pytest.raises(ValidationError):
        game_sessions.update_game_session(
            db_session, test_user, game_session.id, {"max_players": FieldUpdate.set(0)}
        )


def test_update_removes_image(db_session, test_user, host_profile, make_session, stored_file) -> None:
    session = make_session(test_user, image_id=stored_file.id)
    assert game_sessions.get_game_session(db_session, session.id).image_url is not None

    updates = GameSessionUpdate.model_validate({"image_id": None}).to_updates()
    game_sessions.update_game_session(db_session, test_user, session.id, updates)

    enriched = game_sessions.get_game_session(db_session, session.id)
    assert enriched.image_id is None
    assert enriched.image_url is None


def test_shrinking_to_confirmed_count_marks_full(db_session, game_session, test_user, other_user) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)

    game_sessions.update_game_session(
        db_session, test_user, game_session.id, {"max_players": FieldUpdate.set(2)}
    )

    assert game_session.max_players == 2
    assert game_session.status == SessionStatus.FULL


def test_shrinking_below_confirmed_count_rejected(db_session, game_session, test_user, other_user) -> None:
    game_sessions.join_session(db_session, other_user, game_session.id)
    with pytest.raises(ValidationError):
        game_sessions.update_game_session(
            db_session, test_user, game_session.id, {"max_players": FieldUpdate.set(1)}
        )


def test_list_open_sessions_only_future_open_sorted(
    db_session, test_user, host_profile, make_session
) -> None:
    later = make_session(test_user, title="Later", scheduled_timestamp=future_ms(48))
    sooner = make_session(test_user, title="Sooner", scheduled_timestamp=future_ms(2))
    cancelled = make_session(test_user, title="Cancelled")
    game_sessions.cancel_session(db_session, test_user, cancelled.id)

    listing = game_sessions.list_open_game_sessions(db_session)

    assert [s.id for s in listing] == [sooner.id, later.id]
    first = listing[0]
    assert first.host_display_name == "The Host"
    assert first.host_username == "hostess"
    assert first.current_players == 1
    assert [p.user_id for p in first.participants] == [test_user.id]


def test_host_fallbacks_without_profile_names(
    db_session, make_user, make_profile, make_session
) -> None:
    host = make_user(name="Nameless Host")
    make_profile(host, display_name=None)
    session = make_session(host)

    enriched = game_sessions.get_game_session(db_session, session.id)

    assert enriched.host_display_name == "Nameless Host"
    assert enriched.host_username == f"user{host.id}"


def test_get_game_session_any_status(db_session, game_session, test_user) -> None:
    game_sessions.complete_session(db_session, test_user, game_session.id)
    enriched = game_sessions.get_game_session(db_session, game_session.id)
    assert enriched.status == SessionStatus.COMPLETED
