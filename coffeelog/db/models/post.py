from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, JSON, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from coffeelog.db.base import BaseModel


class Post(BaseModel):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(String(280), nullable=False)
    image_url = Column(String(500), nullable=True)
    hashtags = Column(JSON, default=list, nullable=False)
    is_public = Column(Boolean, default=True, nullable=False)

    # Relationships
    user = relationship("User", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan", passive_deletes=True)
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        Index("ix_posts_public_created", "is_public", "created_at"),
    )


class Comment(BaseModel):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    post = relationship("Post", back_populates="comments")
    user = relationship("User")


class Like(BaseModel):
    __tablename__ = "likes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    post = relationship("Post", back_populates="likes")

    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),
    )
