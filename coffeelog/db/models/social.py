import enum

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Enum, Uuid, UniqueConstraint, CheckConstraint

from coffeelog.db.base import BaseModel


class NotificationType(enum.Enum):
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    MENTION = "mention"


class Follow(BaseModel):
    __tablename__ = "follows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    follower_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    following_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        CheckConstraint("follower_id <> following_id", name="ck_follows_not_self"),
    )


class Notification(BaseModel):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(
        Enum(NotificationType, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    title = Column(String(100), nullable=False)
    message = Column(String(500), nullable=False)
    # Ссылка на пост без внешнего ключа: уведомление переживает удаление поста
    related_id = Column(Integer, nullable=True)
    is_read = Column(Boolean, default=False, nullable=False)
