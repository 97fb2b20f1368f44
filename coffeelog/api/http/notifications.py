from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from coffeelog.api.http.posts import page_limit
from coffeelog.core.auth import require_user_id
from coffeelog.core.db import get_db
from coffeelog.domains.social.schemas import NotificationResponse, NotificationPage
from coffeelog.domains.social.services import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationPage)
async def list_notifications(
    limit: int = Depends(page_limit),
    cursor: Optional[int] = Query(None),
    unread_only: bool = Query(False, alias="unreadOnly"),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Уведомления текущего пользователя"""
    notification_service = NotificationService(db)

    page = await notification_service.list_notifications(user_id, limit, cursor, unread_only)
    unread_count = await notification_service.count_unread(user_id)

    return NotificationPage(
        notifications=[NotificationResponse.model_validate(item) for item in page.items],
        has_more=page.has_more,
        next_cursor=page.next_cursor,
        unread_count=unread_count
    )


@router.post("/read-all")
async def mark_all_read(
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    notification_service = NotificationService(db)
    updated = await notification_service.mark_all_read(user_id)
    return {"success": True, "updated": updated}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: int,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Отметить уведомление прочитанным"""
    notification_service = NotificationService(db)
    return await notification_service.mark_read(notification_id, user_id)
