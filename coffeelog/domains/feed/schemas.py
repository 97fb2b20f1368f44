from datetime import datetime
from typing import Optional, List
import uuid

from pydantic import Field, field_validator

from coffeelog.core.schemas import CamelModel, CursorPage
from coffeelog.core.validators import validate_http_url, validate_not_blank


class PostCreate(CamelModel):
    """Схема для создания поста"""
    content: str = Field(..., min_length=1, max_length=280)
    image_url: Optional[str] = Field(None, max_length=500)
    hashtags: Optional[List[str]] = None
    is_public: bool = True

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return validate_not_blank(v)

    @field_validator('image_url')
    @classmethod
    def validate_image_url(cls, v):
        return validate_http_url(v)


class PostUpdate(CamelModel):
    """Схема для обновления поста; передаются только изменяемые поля"""
    content: Optional[str] = Field(None, min_length=1, max_length=280)
    image_url: Optional[str] = Field(None, max_length=500)
    hashtags: Optional[List[str]] = None
    is_public: Optional[bool] = None

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return validate_not_blank(v)

    @field_validator('image_url')
    @classmethod
    def validate_image_url(cls, v):
        return validate_http_url(v)


class AuthorResponse(CamelModel):
    id: uuid.UUID
    name: Optional[str] = None


class PostResponse(CamelModel):
    id: int
    user_id: uuid.UUID
    content: str
    image_url: Optional[str] = None
    hashtags: List[str] = []
    is_public: bool
    created_at: datetime
    updated_at: datetime
    user: AuthorResponse
    likes_count: int = 0
    comments_count: int = 0
    is_liked: bool = False


class PostPage(CursorPage):
    posts: List[PostResponse]


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=500)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        return validate_not_blank(v)


class CommentUpdate(CommentCreate):
    pass


class CommentResponse(CamelModel):
    id: int
    post_id: int
    user_id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime
    user: AuthorResponse


class CommentPage(CursorPage):
    comments: List[CommentResponse]


class LikeResponse(CamelModel):
    liked: bool
    likes_count: int
