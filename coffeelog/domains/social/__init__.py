from coffeelog.domains.social.entities import Notification, NotificationType, Profile
from coffeelog.domains.social.schemas import (
    NotificationResponse, NotificationPage, FollowResponse,
    ProfileUpdate, ProfileResponse, UserOverviewResponse, UploadResponse
)
from coffeelog.domains.social.services import NotificationService, SocialService

__all__ = [
    "Notification", "NotificationType", "Profile",
    "NotificationResponse", "NotificationPage", "FollowResponse",
    "ProfileUpdate", "ProfileResponse", "UserOverviewResponse", "UploadResponse",
    "NotificationService", "SocialService"
]
