from datetime import datetime
from typing import Optional, List
import uuid

from pydantic import Field, field_validator

from coffeelog.core.schemas import CamelModel, CursorPage
from coffeelog.core.validators import validate_http_url


class NotificationResponse(CamelModel):
    id: int
    type: str
    title: str
    message: str
    related_id: Optional[int] = None
    is_read: bool
    created_at: datetime


class NotificationPage(CursorPage):
    notifications: List[NotificationResponse]
    unread_count: int


class FollowResponse(CamelModel):
    following: bool
    followers_count: int


class ProfileUpdate(CamelModel):
    """Схема для обновления профиля"""
    bio: Optional[str] = Field(None, max_length=160)
    avatar_url: Optional[str] = Field(None, max_length=500)
    website: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=100)
    is_public: Optional[bool] = None

    @field_validator('avatar_url', 'website')
    @classmethod
    def validate_url(cls, v):
        return validate_http_url(v)


class ProfileResponse(CamelModel):
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    is_public: bool = True


class UserStats(CamelModel):
    posts_count: int
    followers_count: int
    following_count: int


class UserOverviewResponse(CamelModel):
    id: uuid.UUID
    name: Optional[str] = None
    profile: Optional[ProfileResponse] = None
    stats: UserStats
    is_following: bool
    is_self: bool


class UploadResponse(CamelModel):
    url: str
