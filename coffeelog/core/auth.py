from typing import Optional, Dict, Any
import uuid

from fastapi import Request

from coffeelog.core.config import get_settings
from coffeelog.core.exceptions import UnauthorizedError
from coffeelog.core.security import verify_session_token


def get_session_payload(request: Request) -> Optional[Dict[str, Any]]:
    """Данные сессии из cookie или None для анонимного запроса"""
    token = request.cookies.get(get_settings().session_cookie_name)
    return verify_session_token(token)


async def require_user_id(request: Request) -> uuid.UUID:
    """Зависимость для защищённых маршрутов.

    Без действительной cookie запрос отклоняется с 401; иначе id пользователя
    сохраняется в ``request.state.user_id`` и передаётся обработчику.
    """
    payload = get_session_payload(request)
    if payload is None:
        raise UnauthorizedError()

    user_id = uuid.UUID(payload["userId"])
    request.state.user_id = user_id
    return user_id
