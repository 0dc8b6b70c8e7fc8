"""Community post endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from game_night.core.settings import settings
from game_night.models.enums import PostType
from game_night.schemas.post import PostCreate, PostCreated, PostPage, PostResponse, PostUpdate
from game_night.services import community_posts

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, caller: CurrentUserDep, db: SessionDep) -> PostCreated:
    post = community_posts.create_post(db, caller, payload)
    return PostCreated(id=post.id)


@router.get("/", response_model=PostPage)
async def list_posts(
    db: SessionDep,
    num_items: int | None = Query(None, ge=1, description="Page size"),
    cursor: str | None = Query(None, description="Cursor from a previous page"),
    post_type: PostType | None = Query(None),
    author_id: int | None = Query(None),
    tag: str | None = Query(None, description="Keep only posts carrying this tag"),
) -> PostPage:
    """List posts newest first.

    Args:
        db: Database session
        num_items: Page size (defaults to ``POSTS_PAGE_SIZE_DEFAULT``, capped at
            ``POSTS_PAGE_SIZE_MAX``)
        cursor: ``continue_cursor`` from the previous page
        post_type: Filter by post type; wins over ``author_id``
        author_id: Filter by author
        tag: Applied to the fetched page only

    Returns:
        The page, whether the feed is exhausted, and the next cursor
    """
    size = min(num_items or settings.posts_page_size_default, settings.posts_page_size_max)
    return community_posts.list_posts(
        db,
        num_items=size,
        cursor=cursor,
        post_type=post_type,
        author_id=author_id,
        tag=tag,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post_details(post_id: int, db: SessionDep) -> PostResponse:
    return community_posts.get_post_details(db, post_id)


@router.patch("/{post_id}", response_model=bool)
async def update_post(
    post_id: int,
    payload: PostUpdate,
    caller: CurrentUserDep,
    db: SessionDep,
) -> bool:
    return community_posts.update_post(db, caller, post_id, payload.to_updates())


@router.delete("/{post_id}", response_model=bool)
async def delete_post(post_id: int, caller: CurrentUserDep, db: SessionDep) -> bool:
    return community_posts.delete_post(db, caller, post_id)


@router.post("/{post_id}/like", response_model=bool)
async def like_post(post_id: int, caller: CurrentUserDep, db: SessionDep) -> bool:
    return community_posts.like_post(db, caller, post_id)


@router.post("/{post_id}/unlike", response_model=bool)
async def unlike_post(post_id: int, caller: CurrentUserDep, db: SessionDep) -> bool:
    return community_posts.unlike_post(db, caller, post_id)
