from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from coffeelog.core.auth import require_user_id
from coffeelog.core.db import get_db
from coffeelog.domains.social.schemas import (
    FollowResponse, ProfileUpdate, ProfileResponse, UserOverviewResponse
)
from coffeelog.domains.social.services import SocialService

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/me/profile", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Обновление своего профиля"""
    social_service = SocialService(db)
    return await social_service.update_profile(user_id, profile_data)


@router.get("/{target_id}", response_model=UserOverviewResponse)
async def get_user(
    target_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Профиль пользователя со счётчиками"""
    social_service = SocialService(db)
    return await social_service.get_user_overview(target_id, user_id)


@router.post("/{target_id}/follow", response_model=FollowResponse)
async def toggle_follow(
    target_id: uuid.UUID,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Подписаться или отписаться"""
    social_service = SocialService(db)

    following = await social_service.toggle_follow(user_id, target_id)
    followers_count = await social_service.count_followers(target_id)

    return FollowResponse(following=following, followers_count=followers_count)
