from typing import Optional, List, Set, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
import uuid

from coffeelog.db.models.post import Post as PostModel, Comment as CommentModel, Like as LikeModel
from coffeelog.db.models.user import User as UserModel
from coffeelog.db.repositories.pagination import after_cursor, newest_first

if TYPE_CHECKING:
    from coffeelog.domains.feed.entities import Post


class PostRepository:
    """Репозиторий для работы с постами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select_with_stats(self):
        likes_count = (
            select(func.count(LikeModel.id))
            .where(LikeModel.post_id == PostModel.id)
            .correlate(PostModel)
            .scalar_subquery()
        )
        comments_count = (
            select(func.count(CommentModel.id))
            .where(CommentModel.post_id == PostModel.id)
            .correlate(PostModel)
            .scalar_subquery()
        )
        return (
            select(
                PostModel,
                UserModel.name.label("author_name"),
                likes_count.label("likes_count"),
                comments_count.label("comments_count")
            )
            .join(UserModel, UserModel.id == PostModel.user_id)
        )

    async def create(self, post: "Post") -> "Post":
        """Создание поста"""
        db_post = PostModel(
            user_id=post.user_id,
            content=post.content,
            image_url=post.image_url,
            hashtags=list(post.hashtags),
            is_public=post.is_public
        )

        self.session.add(db_post)
        await self.session.flush()
        return await self.get_by_id(db_post.id)

    async def get_by_id(self, post_id: int, viewer_id: Optional[uuid.UUID] = None) -> Optional["Post"]:
        """Получение поста со счётчиками"""
        result = await self.session.execute(
            self._select_with_stats().where(PostModel.id == post_id)
        )
        row = result.one_or_none()
        if row is None:
            return None

        liked = await self.liked_post_ids(viewer_id, [post_id]) if viewer_id else set()
        return self._to_domain(row, liked)

    async def get_owner_id(self, post_id: int) -> Optional[uuid.UUID]:
        """Только владелец поста: для проверок существования и прав"""
        result = await self.session.execute(
            select(PostModel.user_id).where(PostModel.id == post_id)
        )
        return result.scalar_one_or_none()

    async def list_public(
        self,
        viewer_id: uuid.UUID,
        limit: int = 20,
        cursor: Optional[int] = None,
        author_id: Optional[uuid.UUID] = None
    ) -> List["Post"]:
        """Публичные посты, новые сначала; возвращает до limit + 1 строк"""
        stmt = self._select_with_stats().where(PostModel.is_public.is_(True))
        if author_id is not None:
            stmt = stmt.where(PostModel.user_id == author_id)

        stmt = await after_cursor(self.session, stmt, PostModel, cursor)
        if stmt is None:
            return []

        result = await self.session.execute(newest_first(stmt, PostModel, limit))
        rows = result.all()

        liked = await self.liked_post_ids(viewer_id, [row.Post.id for row in rows])
        return [self._to_domain(row, liked) for row in rows]

    async def update(self, post: "Post") -> None:
        """Обновление поста"""
        await self.session.execute(
            update(PostModel)
            .where(PostModel.id == post.id)
            .values(
                content=post.content,
                image_url=post.image_url,
                hashtags=list(post.hashtags),
                is_public=post.is_public,
                updated_at=post.updated_at
            )
        )

    async def delete(self, post_id: int) -> bool:
        """Удаление поста; комментарии и лайки удаляются каскадно"""
        result = await self.session.execute(delete(PostModel).where(PostModel.id == post_id))
        return result.rowcount > 0

    async def count_by_user(self, user_id: uuid.UUID) -> int:
        result = await self.session.execute(
            select(func.count(PostModel.id)).where(PostModel.user_id == user_id)
        )
        return result.scalar()

    async def liked_post_ids(self, viewer_id: uuid.UUID, post_ids: List[int]) -> Set[int]:
        """Какие из постов лайкнул пользователь"""
        if not post_ids:
            return set()
        result = await self.session.execute(
            select(LikeModel.post_id).where(
                LikeModel.user_id == viewer_id,
                LikeModel.post_id.in_(post_ids)
            )
        )
        return set(result.scalars().all())

    def _to_domain(self, row, liked: Set[int]) -> "Post":
        """Преобразование строки выборки в доменную сущность"""
        from coffeelog.domains.feed.entities import Post, Author

        db_post = row.Post
        return Post(
            id=db_post.id,
            user_id=db_post.user_id,
            content=db_post.content,
            image_url=db_post.image_url,
            hashtags=list(db_post.hashtags or []),
            is_public=db_post.is_public,
            created_at=db_post.created_at,
            updated_at=db_post.updated_at,
            user=Author(db_post.user_id, row.author_name),
            likes_count=row.likes_count,
            comments_count=row.comments_count,
            is_liked=db_post.id in liked
        )


class LikeRepository:
    """Репозиторий лайков; пара (post_id, user_id) уникальна"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, post_id: int, user_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            select(LikeModel.id).where(LikeModel.post_id == post_id, LikeModel.user_id == user_id)
        )
        return result.scalar_one_or_none() is not None

    async def create(self, post_id: int, user_id: uuid.UUID) -> None:
        self.session.add(LikeModel(post_id=post_id, user_id=user_id))
        await self.session.flush()

    async def delete(self, post_id: int, user_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            delete(LikeModel).where(LikeModel.post_id == post_id, LikeModel.user_id == user_id)
        )
        return result.rowcount > 0

    async def count_for_post(self, post_id: int) -> int:
        result = await self.session.execute(
            select(func.count(LikeModel.id)).where(LikeModel.post_id == post_id)
        )
        return result.scalar()
