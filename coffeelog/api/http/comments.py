from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from coffeelog.core.auth import require_user_id
from coffeelog.core.db import get_db
from coffeelog.domains.feed.schemas import CommentUpdate, CommentResponse
from coffeelog.domains.feed.services import FeedService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Обновление своего комментария"""
    feed_service = FeedService(db)
    return await feed_service.update_comment(comment_id, user_id, comment_data.content)


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: int,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Удаление своего комментария"""
    feed_service = FeedService(db)
    await feed_service.delete_comment(comment_id, user_id)
    return {"success": True}
