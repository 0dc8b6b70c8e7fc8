"""Community feed: author-owned posts with a bare like counter.

Likes are not recorded per user, so the same caller can like a post
repeatedly; unlike only guards the counter against going negative.
"""
from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from game_night.core.errors import AuthorizationError, NotFoundError, ValidationError
from game_night.models import CommunityPost, User
from game_night.models.enums import PostType
from game_night.schemas.post import PostCreate, PostPage, PostResponse
from game_night.services.enrichment import load_people
from game_night.services.files import require_file, resolve_file_urls
from game_night.services.updates import Updates, apply_updates, get_update

logger = logging.getLogger(__name__)

__all__ = [
    "create_post",
    "update_post",
    "delete_post",
    "like_post",
    "unlike_post",
    "list_posts",
    "get_post_details",
    "encode_cursor",
    "decode_cursor",
]


def encode_cursor(post_id: int) -> str:
    return base64.urlsafe_b64encode(str(post_id).encode()).decode().rstrip("=")


def decode_cursor(cursor: str) -> int:
    padding = "=" * (-len(cursor) % 4)
    try:
        return int(base64.urlsafe_b64decode(cursor + padding).decode())
    except (binascii.Error, UnicodeDecodeError, ValueError) as err:
        raise ValidationError("Invalid pagination cursor.") from err


def _get_post_or_404(db: Session, post_id: int) -> CommunityPost:
    post = db.get(CommunityPost, post_id)
    if post is None:
        raise NotFoundError("Post not found.")
    return post


def _get_own_post(db: Session, caller: User, post_id: int, action: str) -> CommunityPost:
    post = _get_post_or_404(db, post_id)
    if post.author_id != caller.id:
        raise AuthorizationError(f"Not authorized to {action} this post.")
    return post


def create_post(db: Session, caller: User, data: PostCreate) -> CommunityPost:
    if data.content.strip() == "":
        raise ValidationError("Post content cannot be empty.")
    require_file(db, data.image_id)

    post = CommunityPost(
        author_id=caller.id,
        title=data.title,
        content=data.content,
        post_type=(data.post_type or PostType.GENERAL).value,
        tags=data.tags,
        likes_count=0,
        comments_count=0,
        image_id=data.image_id,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.debug("User %s created post %s", caller.id, post.id)
    return post


def update_post(db: Session, caller: User, post_id: int, updates: Updates) -> bool:
    post = _get_own_post(db, caller, post_id, "update")
    content = get_update(updates, "content")
    if content.is_set and content.value.strip() == "":
        raise ValidationError("Post content cannot be empty.")
    image = get_update(updates, "image_id")
    if image.is_set:
        require_file(db, image.value)

    apply_updates(post, updates)
    db.commit()
    return True


def delete_post(db: Session, caller: User, post_id: int) -> bool:
    """Delete a post; its image blob, if any, is left in storage."""
    post = _get_own_post(db, caller, post_id, "delete")
    db.delete(post)
    db.commit()
    logger.debug("User %s deleted post %s", caller.id, post_id)
    return True


def like_post(db: Session, caller: User, post_id: int) -> bool:
    post = _get_post_or_404(db, post_id)
    post.likes_count += 1
    db.commit()
    return True


def unlike_post(db: Session, caller: User, post_id: int) -> bool:
    post = _get_post_or_404(db, post_id)
    if post.likes_count > 0:
        post.likes_count -= 1
        db.commit()
    return True


def _enrich(db: Session, posts: Sequence[CommunityPost]) -> list[PostResponse]:
    authors = load_people(db, (p.author_id for p in posts))
    images = resolve_file_urls(db, (p.image_id for p in posts))
    enriched = []
    for post in posts:
        author = authors[post.author_id]
        enriched.append(
            PostResponse(
                id=post.id,
                author_id=post.author_id,
                title=post.title,
                content=post.content,
                post_type=post.post_type,
                tags=post.tags,
                likes_count=post.likes_count,
                comments_count=post.comments_count,
                image_id=post.image_id,
                created_at=post.created_at,
                author_username=author.username("Unknown"),
                author_display_name=author.display_name("Unknown User"),
                author_profile_image_url=author.profile_image_url,
                image_url=images.get(post.image_id) if post.image_id else None,
            )
        )
    return enriched


def list_posts(
    db: Session,
    *,
    num_items: int,
    cursor: str | None = None,
    post_type: PostType | None = None,
    author_id: int | None = None,
    tag: str | None = None,
) -> PostPage:
    """Return one page of posts, newest first.

    ``post_type`` takes precedence over ``author_id``. The tag filter runs on
    the page after it is fetched, so a filtered page can hold fewer than
    ``num_items`` posts while ``is_done`` still reflects the unfiltered feed.
    """
    stmt = select(CommunityPost)
    if post_type is not None:
        stmt = stmt.where(CommunityPost.post_type == post_type.value)
    elif author_id is not None:
        stmt = stmt.where(CommunityPost.author_id == author_id)
    if cursor:
        stmt = stmt.where(CommunityPost.id < decode_cursor(cursor))

    # Ids grow with creation order, so id order is creation order.
    rows = db.scalars(stmt.order_by(CommunityPost.id.desc()).limit(num_items + 1)).all()
    is_done = len(rows) <= num_items
    page = list(rows[:num_items])

    if page:
        continue_cursor = encode_cursor(page[-1].id)
    else:
        continue_cursor = cursor or ""

    enriched = _enrich(db, page)
    if tag is not None and tag.strip() != "":
        enriched = [p for p in enriched if p.tags and tag in p.tags]

    return PostPage(page=enriched, is_done=is_done, continue_cursor=continue_cursor)


def get_post_details(db: Session, post_id: int) -> PostResponse:
    return _enrich(db, [_get_post_or_404(db, post_id)])[0]
