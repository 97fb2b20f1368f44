from typing import Optional

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Базовая схема API: поля в snake_case, JSON в camelCase"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CursorPage(CamelModel):
    """Общая часть ответов с курсорной пагинацией"""
    has_more: bool
    next_cursor: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_missing_cursor(self, handler):
        # На последней странице курсора в ответе нет совсем
        data = handler(self)
        if self.next_cursor is None:
            data.pop("nextCursor", None)
            data.pop("next_cursor", None)
        return data
