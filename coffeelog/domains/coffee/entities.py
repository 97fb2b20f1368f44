import uuid
from datetime import date, datetime, timezone
from typing import Optional


class CoffeeRecord:
    """Запись о выпитом кофе.

    ``date`` - день, в который засчитывается запись (выбирается пользователем),
    ``timestamp`` - фактический момент записи, используется только для анализа по часам.
    """

    def __init__(
        self,
        user_id: uuid.UUID,
        date: date,
        cups: int,
        timestamp: datetime,
        id: Optional[int] = None,
        coffee_type: Optional[str] = None,
        size: Optional[str] = None,
        location: Optional[str] = None,
        notes: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.user_id = user_id
        self.date = date
        self.cups = cups
        self.timestamp = timestamp
        self.coffee_type = coffee_type
        self.size = size
        self.location = location
        self.notes = notes
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @property
    def timestamp_utc(self) -> datetime:
        # SQLite возвращает наивное время; в базу всегда пишется UTC
        if self.timestamp.tzinfo is None:
            return self.timestamp.replace(tzinfo=timezone.utc)
        return self.timestamp.astimezone(timezone.utc)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def __repr__(self) -> str:
        return f"CoffeeRecord(id={self.id}, date={self.date}, cups={self.cups})"


class CoffeeSettings:
    """Личные лимиты потребления кофе"""

    DEFAULT_DAILY_LIMIT = 4
    DEFAULT_WARNING_THRESHOLD = 3
    DEFAULT_MIN_INTERVAL = 240  # минуты

    def __init__(
        self,
        user_id: uuid.UUID,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        warning_threshold: int = DEFAULT_WARNING_THRESHOLD,
        min_interval: int = DEFAULT_MIN_INTERVAL,
        updated_at: Optional[datetime] = None
    ):
        self.user_id = user_id
        self.daily_limit = daily_limit
        self.warning_threshold = warning_threshold
        self.min_interval = min_interval
        self.updated_at = updated_at

    @classmethod
    def defaults(cls, user_id: uuid.UUID) -> "CoffeeSettings":
        return cls(user_id=user_id)
