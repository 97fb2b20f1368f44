import logging
from typing import Optional
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from coffeelog.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from coffeelog.core.pagination import Page
from coffeelog.db.repositories.post_repository import PostRepository
from coffeelog.db.repositories.social_repository import (
    FollowRepository, NotificationRepository, ProfileRepository
)
from coffeelog.db.repositories.user_repository import UserRepository
from coffeelog.domains.social.entities import Notification, NotificationType, Profile
from coffeelog.domains.social.schemas import ProfileUpdate

logger = logging.getLogger(__name__)


class NotificationService:
    """Сервис уведомлений.

    ``notify`` только добавляет запись в текущую транзакцию; фиксирует её
    вызывающий сервис вместе с действием, которое породило уведомление.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.notification_repository = NotificationRepository(session)
        self.profile_repository = ProfileRepository(session)

    async def notify(
        self,
        recipient_id: uuid.UUID,
        actor_id: uuid.UUID,
        type: NotificationType,
        title: str,
        message: str,
        related_id: Optional[int] = None
    ) -> Optional[Notification]:
        """Создание уведомления, если действующее лицо не сам получатель"""
        if recipient_id == actor_id:
            return None

        actor_name = await self.profile_repository.get_user_name(actor_id)
        notification = Notification(
            user_id=recipient_id,
            type=type.value,
            title=title,
            message=message.format(actor=actor_name or "Someone"),
            related_id=related_id
        )
        return await self.notification_repository.create(notification)

    async def list_notifications(
        self,
        user_id: uuid.UUID,
        limit: int = 20,
        cursor: Optional[int] = None,
        unread_only: bool = False
    ) -> Page[Notification]:
        rows = await self.notification_repository.list_for_user(user_id, limit, cursor, unread_only)
        return Page.from_rows(rows, limit)

    async def count_unread(self, user_id: uuid.UUID) -> int:
        return await self.notification_repository.count_for_user(user_id, unread_only=True)

    async def mark_read(self, notification_id: int, user_id: uuid.UUID) -> Notification:
        """Отметка уведомления прочитанным: сначала существование, затем владелец"""
        notification = await self.notification_repository.get_by_id(notification_id)

        if not notification:
            raise NotFoundError("Notification not found")

        if not notification.is_owned_by(user_id):
            raise ForbiddenError("You don't have permission to modify this notification")

        await self.notification_repository.mark_read(notification_id)
        await self.session.commit()

        notification.is_read = True
        return notification

    async def mark_all_read(self, user_id: uuid.UUID) -> int:
        updated = await self.notification_repository.mark_all_read(user_id)
        await self.session.commit()
        return updated


class SocialService:
    """Сервис подписок и профилей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
        self.post_repository = PostRepository(session)
        self.follow_repository = FollowRepository(session)
        self.profile_repository = ProfileRepository(session)
        self.notifications = NotificationService(session)

    async def toggle_follow(self, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        """Подписка/отписка; возвращает новое состояние"""
        if follower_id == following_id:
            raise ValidationError("You cannot follow yourself")

        if not await self.user_repository.exists(following_id):
            raise NotFoundError("User not found")

        if await self.follow_repository.exists(follower_id, following_id):
            await self.follow_repository.delete(follower_id, following_id)
            await self.session.commit()
            return False

        try:
            await self.follow_repository.create(follower_id, following_id)
            await self.notifications.notify(
                recipient_id=following_id,
                actor_id=follower_id,
                type=NotificationType.FOLLOW,
                title="New follower",
                message="{actor} started following you"
            )
            await self.session.commit()
        except IntegrityError:
            # Параллельный запрос уже создал подписку
            await self.session.rollback()
            logger.info(f"Follow {follower_id} -> {following_id} already exists")

        return True

    async def count_followers(self, user_id: uuid.UUID) -> int:
        return await self.follow_repository.count_followers(user_id)

    async def get_user_overview(self, target_id: uuid.UUID, viewer_id: uuid.UUID) -> dict:
        """Пользователь с профилем и счётчиками"""
        user = await self.user_repository.get_by_id(target_id)
        if not user:
            raise NotFoundError("User not found")

        profile = await self.profile_repository.get_by_user(target_id)
        is_self = target_id == viewer_id

        # Скрытый профиль видит только владелец
        if profile and not profile.is_public and not is_self:
            profile = None

        return {
            "id": user.id,
            "name": user.name,
            "profile": profile,
            "stats": {
                "posts_count": await self.post_repository.count_by_user(target_id),
                "followers_count": await self.follow_repository.count_followers(target_id),
                "following_count": await self.follow_repository.count_following(target_id),
            },
            "is_following": False if is_self else await self.follow_repository.exists(viewer_id, target_id),
            "is_self": is_self,
        }

    async def update_profile(self, user_id: uuid.UUID, data: ProfileUpdate) -> Profile:
        """Создание или обновление своего профиля"""
        profile = await self.profile_repository.get_by_user(user_id) or Profile(user_id=user_id)
        profile.update(**data.model_dump(exclude_unset=True))

        if profile.is_public is None:
            profile.is_public = True

        updated = await self.profile_repository.upsert(profile)
        await self.session.commit()
        return updated
