from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from coffeelog.core.auth import get_session_payload, require_user_id
from coffeelog.core.config import get_settings
from coffeelog.core.db import get_db
from coffeelog.core.exceptions import UnauthorizedError
from coffeelog.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, LoginResponse, SessionResponse
)
from coffeelog.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        path="/",
        httponly=True,
        samesite="strict",
        secure=not settings.is_development,
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)
    return await identity_service.register_user(user_data)


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: UserLogin,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя: токен кладётся в HttpOnly cookie"""
    identity_service = IdentityService(db)

    token, user = await identity_service.login_user(login_data)
    _set_session_cookie(response, token)

    return LoginResponse(user=UserResponse.model_validate(user))


@router.post("/logout")
async def logout(response: Response):
    """Выход пользователя"""
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="strict",
        secure=not settings.is_development,
    )
    return {"success": True, "message": "Logged out"}


@router.get("/session", response_model=SessionResponse)
async def get_session(request: Request):
    """Мягкая проверка сессии: анонимный запрос не является ошибкой"""
    return SessionResponse(user=get_session_payload(request))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Текущий пользователь"""
    identity_service = IdentityService(db)

    user = await identity_service.get_user_by_id(user_id)
    if not user:
        # Токен пережил удалённого пользователя
        raise UnauthorizedError()

    return user
