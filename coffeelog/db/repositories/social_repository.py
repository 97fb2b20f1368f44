from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
import uuid

from coffeelog.db.models.social import (
    Follow as FollowModel,
    Notification as NotificationModel,
    NotificationType as NotificationTypeModel
)
from coffeelog.db.models.user import User as UserModel, UserProfile as UserProfileModel
from coffeelog.db.repositories.pagination import after_cursor, newest_first

if TYPE_CHECKING:
    from coffeelog.domains.social.entities import Notification, Profile


class FollowRepository:
    """Репозиторий подписок; пара (follower_id, following_id) уникальна"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            select(FollowModel.id).where(
                FollowModel.follower_id == follower_id,
                FollowModel.following_id == following_id
            )
        )
        return result.scalar_one_or_none() is not None

    async def create(self, follower_id: uuid.UUID, following_id: uuid.UUID) -> None:
        self.session.add(FollowModel(follower_id=follower_id, following_id=following_id))
        await self.session.flush()

    async def delete(self, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            delete(FollowModel).where(
                FollowModel.follower_id == follower_id,
                FollowModel.following_id == following_id
            )
        )
        return result.rowcount > 0

    async def count_followers(self, user_id: uuid.UUID) -> int:
        result = await self.session.execute(
            select(func.count(FollowModel.id)).where(FollowModel.following_id == user_id)
        )
        return result.scalar()

    async def count_following(self, user_id: uuid.UUID) -> int:
        result = await self.session.execute(
            select(func.count(FollowModel.id)).where(FollowModel.follower_id == user_id)
        )
        return result.scalar()


class NotificationRepository:
    """Репозиторий уведомлений"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, notification: "Notification") -> "Notification":
        db_notification = NotificationModel(
            user_id=notification.user_id,
            type=NotificationTypeModel(notification.type),
            title=notification.title,
            message=notification.message,
            related_id=notification.related_id,
            is_read=notification.is_read
        )

        self.session.add(db_notification)
        await self.session.flush()
        await self.session.refresh(db_notification)
        return self._to_domain(db_notification)

    async def get_by_id(self, notification_id: int) -> Optional["Notification"]:
        db_notification = await self.session.get(NotificationModel, notification_id)
        return self._to_domain(db_notification) if db_notification else None

    async def list_for_user(
        self,
        user_id: uuid.UUID,
        limit: int = 20,
        cursor: Optional[int] = None,
        unread_only: bool = False
    ) -> List["Notification"]:
        """Уведомления пользователя, новые сначала; до limit + 1 строк"""
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))

        stmt = await after_cursor(self.session, stmt, NotificationModel, cursor)
        if stmt is None:
            return []

        result = await self.session.execute(newest_first(stmt, NotificationModel, limit))
        return [self._to_domain(item) for item in result.scalars().all()]

    async def count_for_user(self, user_id: uuid.UUID, unread_only: bool = False) -> int:
        stmt = select(func.count(NotificationModel.id)).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))

        result = await self.session.execute(stmt)
        return result.scalar()

    async def mark_read(self, notification_id: int) -> None:
        await self.session.execute(
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(is_read=True)
        )

    async def mark_all_read(self, user_id: uuid.UUID) -> int:
        result = await self.session.execute(
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
            .values(is_read=True)
        )
        return result.rowcount

    def _to_domain(self, db_notification: NotificationModel) -> "Notification":
        from coffeelog.domains.social.entities import Notification

        return Notification(
            id=db_notification.id,
            user_id=db_notification.user_id,
            type=db_notification.type.value,
            title=db_notification.title,
            message=db_notification.message,
            related_id=db_notification.related_id,
            is_read=db_notification.is_read,
            created_at=db_notification.created_at
        )


class ProfileRepository:
    """Репозиторий профилей пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user(self, user_id: uuid.UUID) -> Optional["Profile"]:
        result = await self.session.execute(
            select(UserProfileModel).where(UserProfileModel.user_id == user_id)
        )
        db_profile = result.scalar_one_or_none()
        return self._to_domain(db_profile) if db_profile else None

    async def upsert(self, profile: "Profile") -> "Profile":
        """Создание или обновление профиля"""
        result = await self.session.execute(
            select(UserProfileModel).where(UserProfileModel.user_id == profile.user_id)
        )
        db_profile = result.scalar_one_or_none()

        if db_profile is None:
            db_profile = UserProfileModel(user_id=profile.user_id)
            self.session.add(db_profile)

        db_profile.bio = profile.bio
        db_profile.avatar_url = profile.avatar_url
        db_profile.website = profile.website
        db_profile.location = profile.location
        db_profile.is_public = profile.is_public

        await self.session.flush()
        await self.session.refresh(db_profile)
        return self._to_domain(db_profile)

    async def get_user_name(self, user_id: uuid.UUID) -> Optional[str]:
        result = await self.session.execute(select(UserModel.name).where(UserModel.id == user_id))
        return result.scalar_one_or_none()

    def _to_domain(self, db_profile: UserProfileModel) -> "Profile":
        from coffeelog.domains.social.entities import Profile

        return Profile(
            user_id=db_profile.user_id,
            bio=db_profile.bio,
            avatar_url=db_profile.avatar_url,
            website=db_profile.website,
            location=db_profile.location,
            is_public=db_profile.is_public
        )
