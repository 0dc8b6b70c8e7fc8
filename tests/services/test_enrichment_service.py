"""Tests for batched author/host lookups."""

from game_night.services.enrichment import load_people, load_person


def test_fallback_order(db_session, make_user, make_profile) -> None:
    full = make_user(name="Account Name")
    make_profile(full, username="handle", display_name="Shown Name")
    bare = make_user(name="Only Account")
    nameless = make_user(name=None)

    people = load_people(db_session, [full.id, bare.id, nameless.id, 999])

    assert people[full.id].username("x") == "handle"
    assert people[full.id].display_name("x") == "Shown Name"
    assert people[bare.id].username("x") == "Only Account"
    assert people[bare.id].username("x", use_user_name=False) == "x"
    assert people[bare.id].display_name("x") == "Only Account"
    assert people[nameless.id].display_name("Nobody") == "Nobody"
    assert people[999].user is None
    assert people[999].username("Unknown") == "Unknown"


def test_empty_profile_strings_are_kept(db_session, make_user, make_profile) -> None:
    user = make_user(name="Account")
    make_profile(user, display_name="")
    assert load_person(db_session, user.id).display_name("fallback") == ""


def test_no_ids(db_session) -> None:
    assert load_people(db_session, []) == {}
