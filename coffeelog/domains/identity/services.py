import logging
from typing import Optional, Tuple
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from coffeelog.core.exceptions import ConflictError, UnauthorizedError
from coffeelog.core.security import create_session_token
from coffeelog.db.repositories.user_repository import UserRepository
from coffeelog.domains.identity.entities import User
from coffeelog.domains.identity.schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class IdentityService:
    """Сервис для регистрации и аутентификации пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового пользователя"""
        email = user_data.email.lower()

        if await self.user_repository.email_exists(email):
            raise ConflictError("Email already registered")

        # Хеширование bcrypt вне цикла событий
        user = await run_in_threadpool(
            User.create_user,
            email=email,
            password=user_data.password,
            name=user_data.name
        )

        try:
            created = await self.user_repository.create(user)
            await self.session.commit()
        except IntegrityError:
            # Параллельная регистрация с тем же email
            await self.session.rollback()
            raise ConflictError("Email already registered")

        logger.info(f"Registered user {created.id}")
        return created

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_email(login_data.email.lower())

        if not user or not await run_in_threadpool(user.authenticate, login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> Tuple[str, User]:
        """Вход пользователя и выпуск сессионного токена"""
        user = await self.authenticate_user(login_data)

        if not user:
            # Не сообщаем, что именно неверно: email или пароль
            logger.info(f"Failed login attempt for {login_data.email}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = create_session_token(user.id, user.email)
        logger.info(f"User {user.id} logged in")
        return token, user

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Получение пользователя по id"""
        return await self.user_repository.get_by_id(user_id)
