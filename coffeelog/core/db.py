import logging
from typing import AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from coffeelog.core.config import get_settings

logger = logging.getLogger(__name__)


# Базовый класс для моделей
class Base(DeclarativeBase):
    pass


# Пул соединений живёт на уровне процесса: создаётся при старте, закрывается при остановке
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


async def init_engine(database_url: Optional[str] = None, create_tables: Optional[bool] = None) -> AsyncEngine:
    """Создание движка и фабрики сессий"""
    global _engine, _session_factory

    settings = get_settings()
    url = database_url or settings.database_url

    _engine = create_async_engine(url, future=True, echo=settings.sql_echo)
    _session_factory = async_sessionmaker(bind=_engine, class_=AsyncSession, expire_on_commit=False)
    logger.info(f"Database engine initialised for {_engine.url.render_as_string(hide_password=True)}")

    if _engine.dialect.name == "sqlite":
        # SQLite не проверяет внешние ключи без PRAGMA, а каскадное удаление на них опирается
        @event.listens_for(_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    if create_tables if create_tables is not None else settings.create_tables:
        # Импорт регистрирует все модели в Base.metadata
        import coffeelog.db.models  # noqa: F401

        async with _engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    return _engine


async def dispose_engine() -> None:
    """Закрытие пула соединений"""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None


def get_session_factory() -> async_sessionmaker:
    if _session_factory is None:
        raise RuntimeError("Database engine is not initialised")
    return _session_factory


# Функция для dependency injection в FastAPI
async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session_factory()() as session:
        yield session


async def ping() -> bool:
    """Проверка доступности базы данных"""
    async with get_session_factory()() as session:
        await session.execute(text("SELECT 1"))
    return True
