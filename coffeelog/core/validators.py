from typing import Optional

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

_http_url = TypeAdapter(AnyHttpUrl)


def validate_http_url(v: Optional[str]) -> Optional[str]:
    """Пустая строка означает отсутствие значения"""
    if v is None or not v.strip():
        return None
    v = v.strip()
    try:
        _http_url.validate_python(v)
    except ValidationError:
        raise ValueError('Must be a valid http(s) URL')
    return v


def validate_not_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError('Content cannot be empty')
    return v
