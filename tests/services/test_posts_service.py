"""Tests for the community feed service."""

import pytest

from game_night.core.errors import AuthorizationError, NotFoundError, ValidationError
from game_night.models.enums import PostType
from game_night.schemas.post import PostCreate, PostUpdate
from game_night.services import community_posts


def _post(db_session, author, content="Looking for players", **fields):
    return community_posts.create_post(db_session, author, PostCreate(content=content, **fields))


def test_create_defaults_to_general(db_session, test_user) -> None:
    post = _post(db_session, test_user)
    assert post.post_type == PostType.GENERAL
    assert post.likes_count == 0
    assert post.comments_count == 0


def test_create_rejects_blank_content(db_session, test_user) -> None:
    with pytest.raises(ValidationError):
        _post(db_session, test_user, content="  ")


def test_update_is_author_only(db_session, test_user, other_user) -> None:
    post = _post(db_session, test_user)
    updates = PostUpdate(content="Hijacked").to_updates()
    with pytest.raises(AuthorizationError):
        community_posts.update_post(db_session, other_user, post.id, updates)


def test_update_clears_title(db_session, test_user) -> None:
    post = _post(db_session, test_user, title="Old title")
    updates = PostUpdate.model_validate({"title": None, "content": "Edited"}).to_updates()

    community_posts.update_post(db_session, test_user, post.id, updates)

    assert post.title is None
    assert post.content == "Edited"


def test_update_removes_image(db_session, test_user, stored_file) -> None:
    post = _post(db_session, test_user, image_id=stored_file.id)
    assert community_posts.get_post_details(db_session, post.id).image_url is not None

    updates = PostUpdate.model_validate({"image_id": None}).to_updates()
    community_posts.update_post(db_session, test_user, post.id, updates)

    details = community_posts.get_post_details(db_session, post.id)
    assert details.image_id is None
    assert details.image_url is None


def test_update_rejects_blank_content(db_session, test_user) -> None:
    post = _post(db_session, test_user)
    with pytest.raises(ValidationError):
        community_posts.update_post(
            db_session, test_user, post.id, PostUpdate(content=" ").to_updates()
        )


def test_delete(db_session, test_user, other_user) -> None:
    post = _post(db_session, test_user)
    with pytest.raises(AuthorizationError):
        community_posts.delete_post(db_session, other_user, post.id)

    assert community_posts.delete_post(db_session, test_user, post.id) is True
    with pytest.raises(NotFoundError):
        community_posts.get_post_details(db_session, post.id)


def test_like_counter_is_not_deduplicated(db_session, test_user, other_user) -> None:
    post = _post(db_session, test_user)
    community_posts.like_post(db_session, other_user, post.id)
    community_posts.like_post(db_session, other_user, post.id)
    assert post.likes_count == 2


def test_unlike_never_goes_negative(db_session, test_user) -> None:
    post = _post(db_session, test_user)
    assert community_posts.unlike_post(db_session, test_user, post.id) is True
    assert post.likes_count == 0


def test_like_missing_post(db_session, test_user) -> None:
    with pytest.raises(NotFoundError):
        community_posts.like_post(db_session, test_user, 31337)


def test_cursor_round_trip_and_garbage() -> None:
    assert community_posts.decode_cursor(community_posts.encode_cursor(42)) == 42
    with pytest.raises(ValidationError):
        community_posts.decode_cursor("not-a-cursor!!")


def test_pages_walk_newest_first(db_session, test_user) -> None:
    ids = [_post(db_session, test_user, content=f"post {i}").id for i in range(5)]

    first = community_posts.list_posts(db_session, num_items=2)
    assert [p.id for p in first.page] == [ids[4], ids[3]]
    assert first.is_done is False

    second = community_posts.list_posts(db_session, num_items=2, cursor=first.continue_cursor)
    assert [p.id for p in second.page] == [ids[2], ids[1]]

    third = community_posts.list_posts(db_session, num_items=2, cursor=second.continue_cursor)
    assert [p.id for p in third.page] == [ids[0]]
    assert third.is_done is True


def test_exact_page_reports_done(db_session, test_user) -> None:
    for i in range(2):
        _post(db_session, test_user, content=f"post {i}")
    page = community_posts.list_posts(db_session, num_items=2)
    assert len(page.page) == 2
    assert page.is_done is True


def test_type_filter_takes_precedence_over_author(db_session, test_user, other_user) -> None:
    question = _post(db_session, other_user, post_type=PostType.QUESTION)
    _post(db_session, test_user)

    page = community_posts.list_posts(
        db_session, num_items=10, post_type=PostType.QUESTION, author_id=test_user.id
    )

    assert [p.id for p in page.page] == [question.id]


def test_author_filter(db_session, test_user, other_user) -> None:
    mine = _post(db_session, test_user)
    _post(db_session, other_user)
    page = community_posts.list_posts(db_session, num_items=10, author_id=test_user.id)
    assert [p.id for p in page.page] == [mine.id]


def test_tag_filter_applies_after_paging(db_session, test_user) -> None:
    tagged = _post(db_session, test_user, tags=["coop"])
    _post(db_session, test_user, tags=["euro"])
    _post(db_session, test_user)

    page = community_posts.list_posts(db_session, num_items=2, tag="coop")

    # The two newest posts do not carry the tag; the older tagged one is on page two.
    assert page.page == []
    assert page.is_done is False
    nxt = community_posts.list_posts(
        db_session, num_items=2, tag="coop", cursor=page.continue_cursor
    )
    assert [p.id for p in nxt.page] == [tagged.id]


def test_author_fallbacks(db_session, make_user) -> None:
    ghost = make_user(name=None)
    post = _post(db_session, ghost)

    details = community_posts.get_post_details(db_session, post.id)

    assert details.author_username == "Unknown"
    assert details.author_display_name == "Unknown User"
    assert details.author_profile_image_url is None
