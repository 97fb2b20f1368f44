import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class NotificationType(str, Enum):
    """Типы уведомлений"""
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    MENTION = "mention"


class Notification:
    """Уведомление получателю о действии другого пользователя"""

    def __init__(
        self,
        user_id: uuid.UUID,
        type: str,
        title: str,
        message: str,
        related_id: Optional[int] = None,
        is_read: bool = False,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.user_id = user_id
        self.type = NotificationType(type).value
        self.title = title
        self.message = message
        self.related_id = related_id
        self.is_read = is_read
        self.created_at = created_at or datetime.now(timezone.utc)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def __repr__(self) -> str:
        return f"Notification(id={self.id}, type={self.type}, user_id={self.user_id})"


class Profile:
    """Публичный профиль пользователя"""

    def __init__(
        self,
        user_id: uuid.UUID,
        bio: Optional[str] = None,
        avatar_url: Optional[str] = None,
        website: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True
    ):
        self.user_id = user_id
        self.bio = bio
        self.avatar_url = avatar_url
        self.website = website
        self.location = location
        self.is_public = is_public

    def update(self, **fields) -> None:
        for field, value in fields.items():
            setattr(self, field, value)
