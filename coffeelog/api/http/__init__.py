from coffeelog.api.http.health import router as health_router
from coffeelog.api.http.auth import router as auth_router
from coffeelog.api.http.coffee import router as coffee_router
from coffeelog.api.http.posts import router as posts_router
from coffeelog.api.http.comments import router as comments_router
from coffeelog.api.http.feed import router as feed_router
from coffeelog.api.http.users import router as users_router
from coffeelog.api.http.notifications import router as notifications_router
from coffeelog.api.http.uploads import router as uploads_router

__all__ = [
    "health_router",
    "auth_router",
    "coffee_router",
    "posts_router",
    "comments_router",
    "feed_router",
    "users_router",
    "notifications_router",
    "uploads_router"
]
