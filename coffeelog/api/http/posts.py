from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from coffeelog.core.auth import require_user_id
from coffeelog.core.config import get_settings
from coffeelog.core.db import get_db
from coffeelog.core.exceptions import NotFoundError
from coffeelog.domains.feed.schemas import (
    PostCreate, PostUpdate, PostResponse, PostPage,
    CommentCreate, CommentResponse, CommentPage, LikeResponse
)
from coffeelog.domains.feed.services import FeedService

router = APIRouter(prefix="/posts", tags=["posts"])


def page_limit(limit: int = Query(20, ge=1)) -> int:
    """Размер страницы, ограниченный сверху настройками"""
    return min(limit, get_settings().page_limit_max)


@router.get("", response_model=PostPage)
async def list_posts(
    limit: int = Depends(page_limit),
    cursor: Optional[int] = Query(None),
    author_id: Optional[uuid.UUID] = Query(None, alias="userId"),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Публичные посты, при userId только одного автора"""
    feed_service = FeedService(db)

    if author_id is not None:
        page = await feed_service.get_user_posts(author_id, user_id, limit, cursor)
    else:
        page = await feed_service.get_feed(user_id, limit, cursor)

    return PostPage(
        posts=[PostResponse.model_validate(post) for post in page.items],
        has_more=page.has_more,
        next_cursor=page.next_cursor
    )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Создание поста"""
    feed_service = FeedService(db)
    return await feed_service.create_post(user_id, post_data)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    feed_service = FeedService(db)

    post = await feed_service.get_post(post_id, user_id)
    if not post:
        raise NotFoundError("Post not found")

    return post


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    update_data: PostUpdate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Обновление своего поста"""
    feed_service = FeedService(db)
    return await feed_service.update_post(post_id, user_id, update_data)


@router.delete("/{post_id}")
async def delete_post(
    post_id: int,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Удаление своего поста"""
    feed_service = FeedService(db)
    await feed_service.delete_post(post_id, user_id)
    return {"success": True}


@router.post("/{post_id}/like", response_model=LikeResponse)
async def toggle_like(
    post_id: int,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Поставить или снять лайк"""
    feed_service = FeedService(db)

    liked, likes_count = await feed_service.toggle_like(post_id, user_id)
    return LikeResponse(liked=liked, likes_count=likes_count)


@router.get("/{post_id}/comments", response_model=CommentPage)
async def list_comments(
    post_id: int,
    limit: int = Depends(page_limit),
    cursor: Optional[int] = Query(None),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    feed_service = FeedService(db)

    page = await feed_service.list_comments(post_id, user_id, limit, cursor)
    return CommentPage(
        comments=[CommentResponse.model_validate(comment) for comment in page.items],
        has_more=page.has_more,
        next_cursor=page.next_cursor
    )


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Комментарий к посту"""
    feed_service = FeedService(db)
    return await feed_service.create_comment(post_id, user_id, comment_data.content)
