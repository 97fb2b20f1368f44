import logging
from typing import Optional, Tuple
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from coffeelog.core.exceptions import ForbiddenError, NotFoundError
from coffeelog.core.pagination import Page
from coffeelog.db.repositories.comment_repository import CommentRepository
from coffeelog.db.repositories.post_repository import LikeRepository, PostRepository
from coffeelog.domains.feed.entities import Comment, Post
from coffeelog.domains.feed.schemas import PostCreate, PostUpdate
from coffeelog.domains.social.entities import NotificationType
from coffeelog.domains.social.services import NotificationService

logger = logging.getLogger(__name__)


class FeedService:
    """Сервис для постов, лайков и комментариев"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.post_repository = PostRepository(session)
        self.like_repository = LikeRepository(session)
        self.comment_repository = CommentRepository(session)
        self.notifications = NotificationService(session)

    async def create_post(self, user_id: uuid.UUID, post_data: PostCreate) -> Post:
        """Создание поста"""
        post = Post.create_post(
            user_id=user_id,
            content=post_data.content,
            image_url=post_data.image_url,
            hashtags=post_data.hashtags,
            is_public=post_data.is_public
        )

        created = await self.post_repository.create(post)
        await self.session.commit()

        logger.info(f"User {user_id} created post {created.id}")
        return created

    async def get_feed(
        self,
        viewer_id: uuid.UUID,
        limit: int = 20,
        cursor: Optional[int] = None
    ) -> Page[Post]:
        """Публичные посты всех пользователей, новые сначала"""
        rows = await self.post_repository.list_public(viewer_id, limit, cursor)
        return Page.from_rows(rows, limit)

    async def get_user_posts(
        self,
        target_user_id: uuid.UUID,
        viewer_id: uuid.UUID,
        limit: int = 20,
        cursor: Optional[int] = None
    ) -> Page[Post]:
        """Публичные посты одного автора"""
        rows = await self.post_repository.list_public(viewer_id, limit, cursor, author_id=target_user_id)
        return Page.from_rows(rows, limit)

    async def get_post(self, post_id: int, viewer_id: uuid.UUID) -> Optional[Post]:
        """Пост по id; чужой скрытый пост считается отсутствующим"""
        post = await self.post_repository.get_by_id(post_id, viewer_id)

        if not post or not post.is_visible_to(viewer_id):
            return None

        return post

    async def _get_owned_post(self, post_id: int, user_id: uuid.UUID) -> Post:
        """Сначала существование, затем владелец"""
        post = await self.post_repository.get_by_id(post_id, user_id)

        if not post:
            raise NotFoundError("Post not found")

        if not post.is_owned_by(user_id):
            raise ForbiddenError("You don't have permission to modify this post")

        return post

    async def update_post(self, post_id: int, user_id: uuid.UUID, update_data: PostUpdate) -> Post:
        """Обновление поста"""
        post = await self._get_owned_post(post_id, user_id)

        post.apply_patch(update_data.model_dump(exclude_unset=True))
        await self.post_repository.update(post)
        await self.session.commit()

        return await self.post_repository.get_by_id(post_id, user_id)

    async def delete_post(self, post_id: int, user_id: uuid.UUID) -> None:
        """Удаление поста вместе с комментариями и лайками"""
        await self._get_owned_post(post_id, user_id)

        await self.post_repository.delete(post_id)
        await self.session.commit()

        logger.info(f"User {user_id} deleted post {post_id}")

    async def toggle_like(self, post_id: int, user_id: uuid.UUID) -> Tuple[bool, int]:
        """Лайк/снятие лайка; возвращает новое состояние и число лайков"""
        post = await self.get_post(post_id, user_id)
        if not post:
            raise NotFoundError("Post not found")

        if await self.like_repository.exists(post_id, user_id):
            await self.like_repository.delete(post_id, user_id)
            await self.session.commit()
            liked = False
        else:
            try:
                await self.like_repository.create(post_id, user_id)
                await self.notifications.notify(
                    recipient_id=post.user_id,
                    actor_id=user_id,
                    type=NotificationType.LIKE,
                    title="New like",
                    message="{actor} liked your post",
                    related_id=post_id
                )
                await self.session.commit()
            except IntegrityError:
                # Лайк уже поставлен параллельным запросом
                await self.session.rollback()
                logger.info(f"Like on post {post_id} by {user_id} already exists")
            liked = True

        return liked, await self.like_repository.count_for_post(post_id)

    async def create_comment(self, post_id: int, user_id: uuid.UUID, content: str) -> Comment:
        """Комментарий к посту с уведомлением автору"""
        post = await self.get_post(post_id, user_id)
        if not post:
            raise NotFoundError("Post not found")

        created = await self.comment_repository.create(
            Comment(post_id=post_id, user_id=user_id, content=content)
        )
        await self.notifications.notify(
            recipient_id=post.user_id,
            actor_id=user_id,
            type=NotificationType.COMMENT,
            title="New comment",
            message="{actor} commented on your post",
            related_id=post_id
        )
        await self.session.commit()

        return created

    async def list_comments(
        self,
        post_id: int,
        viewer_id: uuid.UUID,
        limit: int = 20,
        cursor: Optional[int] = None
    ) -> Page[Comment]:
        if not await self.get_post(post_id, viewer_id):
            raise NotFoundError("Post not found")

        rows = await self.comment_repository.list_for_post(post_id, limit, cursor)
        return Page.from_rows(rows, limit)

    async def _get_owned_comment(self, comment_id: int, user_id: uuid.UUID) -> Comment:
        comment = await self.comment_repository.get_by_id(comment_id)

        if not comment:
            raise NotFoundError("Comment not found")

        if not comment.is_owned_by(user_id):
            raise ForbiddenError("You don't have permission to modify this comment")

        return comment

    async def update_comment(self, comment_id: int, user_id: uuid.UUID, content: str) -> Comment:
        await self._get_owned_comment(comment_id, user_id)

        await self.comment_repository.update_content(comment_id, content)
        await self.session.commit()

        return await self.comment_repository.get_by_id(comment_id)

    async def delete_comment(self, comment_id: int, user_id: uuid.UUID) -> None:
        await self._get_owned_comment(comment_id, user_id)

        await self.comment_repository.delete(comment_id)
        await self.session.commit()
