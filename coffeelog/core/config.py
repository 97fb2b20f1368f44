from functools import lru_cache
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings

DEV_JWT_SECRET = "dev-secret-key-that-is-at-least-32-chars-long"


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./coffeelog.db"
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"

    # Сессионная cookie
    session_cookie_name: str = "session"
    session_ttl_hours: int = 24

    environment: str = "development"
    cors_origins: List[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    sql_echo: bool = False
    create_tables: bool = True

    default_timezone: str = "UTC"
    page_limit_max: int = 100

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def check_production_secret(self):
        if self.environment == "production" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        return self

    @property
    def is_development(self) -> bool:
        return self.environment in ("development", "test")

    @property
    def session_max_age(self) -> int:
        return self.session_ttl_hours * 60 * 60


@lru_cache
def get_settings() -> Settings:
    return Settings()
