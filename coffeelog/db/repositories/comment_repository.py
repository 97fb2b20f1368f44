from datetime import datetime, timezone
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from coffeelog.db.models.post import Comment as CommentModel
from coffeelog.db.models.user import User as UserModel
from coffeelog.db.repositories.pagination import after_cursor, newest_first

if TYPE_CHECKING:
    from coffeelog.domains.feed.entities import Comment


class CommentRepository:
    """Репозиторий для работы с комментариями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select_with_author(self):
        return (
            select(CommentModel, UserModel.name.label("author_name"))
            .join(UserModel, UserModel.id == CommentModel.user_id)
        )

    async def create(self, comment: "Comment") -> "Comment":
        """Создание комментария"""
        db_comment = CommentModel(
            post_id=comment.post_id,
            user_id=comment.user_id,
            content=comment.content
        )

        self.session.add(db_comment)
        await self.session.flush()
        return await self.get_by_id(db_comment.id)

    async def get_by_id(self, comment_id: int) -> Optional["Comment"]:
        result = await self.session.execute(
            self._select_with_author().where(CommentModel.id == comment_id)
        )
        row = result.one_or_none()
        return self._to_domain(row) if row else None

    async def list_for_post(self, post_id: int, limit: int = 20, cursor: Optional[int] = None) -> List["Comment"]:
        """Комментарии к посту, новые сначала; до limit + 1 строк"""
        stmt = self._select_with_author().where(CommentModel.post_id == post_id)

        stmt = await after_cursor(self.session, stmt, CommentModel, cursor)
        if stmt is None:
            return []

        result = await self.session.execute(newest_first(stmt, CommentModel, limit))
        return [self._to_domain(row) for row in result.all()]

    async def update_content(self, comment_id: int, content: str) -> None:
        await self.session.execute(
            update(CommentModel)
            .where(CommentModel.id == comment_id)
            .values(content=content, updated_at=datetime.now(timezone.utc))
        )

    async def delete(self, comment_id: int) -> bool:
        result = await self.session.execute(delete(CommentModel).where(CommentModel.id == comment_id))
        return result.rowcount > 0

    def _to_domain(self, row) -> "Comment":
        """Преобразование строки выборки в доменную сущность"""
        from coffeelog.domains.feed.entities import Comment, Author

        db_comment = row.Comment
        return Comment(
            id=db_comment.id,
            post_id=db_comment.post_id,
            user_id=db_comment.user_id,
            content=db_comment.content,
            created_at=db_comment.created_at,
            updated_at=db_comment.updated_at,
            user=Author(db_comment.user_id, row.author_name)
        )
