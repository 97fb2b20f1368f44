import re
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

# Хештег: непрерывная последовательность без пробелов и '#' сразу после '#'
HASHTAG_PATTERN = re.compile(r"#([^\s#]+)")


def extract_hashtags(content: str) -> List[str]:
    """Извлечение хештегов из текста"""
    return HASHTAG_PATTERN.findall(content or "")


def merge_hashtags(content: str, supplied: Optional[Iterable[str]] = None) -> List[str]:
    """Объединение хештегов из текста и переданных явно, без повторов"""
    merged: List[str] = []
    candidates = list(extract_hashtags(content))
    for tag in supplied or []:
        candidates.append(tag.strip().lstrip("#"))

    for tag in candidates:
        if tag and tag not in merged:
            merged.append(tag)
    return merged


class Author:
    """Краткие данные автора для ленты"""

    def __init__(self, id: uuid.UUID, name: Optional[str] = None):
        self.id = id
        self.name = name


class Post:
    """Сущность поста"""

    MAX_CONTENT_LENGTH = 280

    def __init__(
        self,
        user_id: uuid.UUID,
        content: str,
        id: Optional[int] = None,
        image_url: Optional[str] = None,
        hashtags: Optional[List[str]] = None,
        is_public: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        user: Optional[Author] = None,
        likes_count: int = 0,
        comments_count: int = 0,
        is_liked: bool = False
    ):
        self.id = id
        self.user_id = user_id
        self.content = content
        self.image_url = image_url
        self.hashtags = hashtags or []
        self.is_public = is_public
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)
        self.user = user or Author(user_id)
        self.likes_count = likes_count
        self.comments_count = comments_count
        self.is_liked = is_liked

    @classmethod
    def create_post(
        cls,
        user_id: uuid.UUID,
        content: str,
        image_url: Optional[str] = None,
        hashtags: Optional[Iterable[str]] = None,
        is_public: bool = True
    ) -> "Post":
        """Создание поста с объединёнными хештегами"""
        return cls(
            user_id=user_id,
            content=content,
            image_url=image_url or None,
            hashtags=merge_hashtags(content, hashtags),
            is_public=is_public
        )

    def apply_patch(self, patch: dict) -> None:
        """Обновление полей поста; хештеги всегда пересчитываются от текста"""
        if "content" in patch and patch["content"] is not None:
            self.content = patch["content"]

        if "content" in patch or "hashtags" in patch:
            self.hashtags = merge_hashtags(self.content, patch.get("hashtags"))

        if "image_url" in patch:
            self.image_url = patch["image_url"] or None

        if "is_public" in patch and patch["is_public"] is not None:
            self.is_public = patch["is_public"]

        self.updated_at = datetime.now(timezone.utc)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def is_visible_to(self, viewer_id: uuid.UUID) -> bool:
        return self.is_public or self.is_owned_by(viewer_id)

    def __repr__(self) -> str:
        return f"Post(id={self.id}, user_id={self.user_id})"


class Comment:
    """Сущность комментария"""

    MAX_CONTENT_LENGTH = 500

    def __init__(
        self,
        post_id: int,
        user_id: uuid.UUID,
        content: str,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        user: Optional[Author] = None
    ):
        self.id = id
        self.post_id = post_id
        self.user_id = user_id
        self.content = content
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)
        self.user = user or Author(user_id)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def __repr__(self) -> str:
        return f"Comment(id={self.id}, post_id={self.post_id})"
