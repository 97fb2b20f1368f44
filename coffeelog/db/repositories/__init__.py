from coffeelog.db.repositories.user_repository import UserRepository
from coffeelog.db.repositories.post_repository import PostRepository, LikeRepository
from coffeelog.db.repositories.comment_repository import CommentRepository
from coffeelog.db.repositories.social_repository import (
    FollowRepository, NotificationRepository, ProfileRepository
)
from coffeelog.db.repositories.coffee_repository import CoffeeRecordRepository, CoffeeSettingsRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "LikeRepository",
    "CommentRepository",
    "FollowRepository",
    "NotificationRepository",
    "ProfileRepository",
    "CoffeeRecordRepository",
    "CoffeeSettingsRepository"
]
