import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Окружение задаётся до импорта приложения: настройки читаются при создании app
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{tempfile.gettempdir()}/coffeelog-import.db")
os.environ.setdefault("CREATE_TABLES", "true")

from coffeelog.core.config import get_settings  # noqa: E402
from coffeelog.core.db import dispose_engine, get_session_factory, init_engine  # noqa: E402
from coffeelog.main import create_app  # noqa: E402

PASSWORD = "coffee-lover-123"


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Отдельный файл SQLite на каждый тест"""
    url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("ENVIRONMENT", "test")
    get_settings.cache_clear()
    yield url
    get_settings.cache_clear()


@pytest.fixture
def app(database_url):
    return create_app()


@pytest.fixture
def client(app):
    """Клиент, внутри которого отработал lifespan приложения"""
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def session(database_url):
    """Асинхронная сессия для тестов сервисного слоя"""
    await init_engine(database_url, create_tables=True)
    async with get_session_factory()() as s:
        yield s
    await dispose_engine()


def register(client, email, name=None, password=PASSWORD):
    payload = {"email": email, "password": password}
    if name:
        payload["name"] = name
    r = client.post("/auth/register", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def login(client, email, password=PASSWORD):
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["user"]


def signup(client, email, name=None):
    """Регистрация и вход: cookie остаётся в клиенте"""
    register(client, email, name)
    return login(client, email)


def act_as(client, email):
    """Смена пользователя: повторный вход перезаписывает cookie"""
    return login(client, email)


@pytest.fixture
def bob(client):
    return register(client, "bob@example.com", "Bob")


@pytest.fixture
def alice(client, bob):
    """Alice зарегистрирована и активна в клиенте; Bob только зарегистрирован"""
    return signup(client, "alice@example.com", "Alice")
