from coffeelog.db.models.user import User, UserProfile
from coffeelog.db.models.post import Post, Comment, Like
from coffeelog.db.models.social import Follow, Notification, NotificationType
from coffeelog.db.models.coffee import CoffeeRecord, CoffeeSettings

__all__ = [
    "User",
    "UserProfile",
    "Post",
    "Comment",
    "Like",
    "Follow",
    "Notification",
    "NotificationType",
    "CoffeeRecord",
    "CoffeeSettings"
]
