from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class Page(Generic[T]):
    """Страница курсорной пагинации"""

    def __init__(self, items: List[T], has_more: bool, next_cursor: Optional[str] = None):
        self.items = items
        self.has_more = has_more
        self.next_cursor = next_cursor

    @classmethod
    def from_rows(cls, rows: List[T], limit: int) -> "Page[T]":
        """Строки выбраны с запасом в одну: лишняя означает, что есть следующая страница"""
        has_more = len(rows) > limit
        items = rows[:limit]
        next_cursor = str(items[-1].id) if has_more and items else None
        return cls(items=items, has_more=has_more, next_cursor=next_cursor)
