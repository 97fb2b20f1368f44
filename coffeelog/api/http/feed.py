from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from coffeelog.api.http.posts import page_limit
from coffeelog.core.auth import require_user_id
from coffeelog.core.db import get_db
from coffeelog.domains.feed.schemas import PostResponse, PostPage
from coffeelog.domains.feed.services import FeedService

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=PostPage)
async def get_feed(
    limit: int = Depends(page_limit),
    cursor: Optional[int] = Query(None),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Лента публичных постов, новые сначала"""
    feed_service = FeedService(db)

    page = await feed_service.get_feed(user_id, limit, cursor)
    return PostPage(
        posts=[PostResponse.model_validate(post) for post in page.items],
        has_more=page.has_more,
        next_cursor=page.next_cursor
    )
