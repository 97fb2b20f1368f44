from typing import Optional

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession


async def after_cursor(session: AsyncSession, stmt: Select, model, cursor: Optional[int]) -> Optional[Select]:
    """Ограничение выборки строками строго после курсора в порядке "новые сначала".

    Возвращает None, если строки-курсора не существует.
    """
    if cursor is None:
        return stmt

    result = await session.execute(
        select(model.created_at, model.id).where(model.id == cursor)
    )
    anchor = result.one_or_none()
    if anchor is None:
        return None

    return stmt.where(
        or_(
            model.created_at < anchor.created_at,
            and_(model.created_at == anchor.created_at, model.id < anchor.id)
        )
    )


def newest_first(stmt: Select, model, limit: int) -> Select:
    """Сортировка по убыванию времени и лишняя строка для определения hasMore"""
    return stmt.order_by(model.created_at.desc(), model.id.desc()).limit(limit + 1)
