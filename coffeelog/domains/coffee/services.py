import calendar
import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import List, Optional
import uuid
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.ext.asyncio import AsyncSession

from coffeelog.core.config import get_settings
from coffeelog.core.exceptions import NotFoundError, ValidationError
from coffeelog.db.repositories.coffee_repository import CoffeeRecordRepository, CoffeeSettingsRepository
from coffeelog.domains.coffee import stats
from coffeelog.domains.coffee.entities import CoffeeRecord, CoffeeSettings
from coffeelog.domains.coffee.schemas import CoffeeRecordCreate, CoffeeSettingsUpdate

logger = logging.getLogger(__name__)

RECENT_RECORDS_LIMIT = 30


def resolve_timezone(name: Optional[str] = None, timestamp: Optional[datetime] = None) -> tzinfo:
    """Часовой пояс пользователя: явно заданный, из смещения timestamp или по умолчанию"""
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            # OSError: имя области вроде "Asia" указывает на каталог
            raise ValidationError(f"Unknown timezone: {name}")

    if timestamp is not None and timestamp.tzinfo is not None:
        return timestamp.tzinfo

    return ZoneInfo(get_settings().default_timezone)


def parse_month(month: str) -> tuple:
    """Границы месяца в формате YYYY-MM"""
    try:
        year, month_number = (int(part) for part in month.split("-"))
        _, last_day = calendar.monthrange(year, month_number)
        return date(year, month_number, 1), date(year, month_number, last_day)
    except (ValueError, calendar.IllegalMonthError):
        raise ValidationError("Month must be in YYYY-MM format")


class CoffeeService:
    """Сервис для учёта выпитого кофе"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.record_repository = CoffeeRecordRepository(session)
        self.settings_repository = CoffeeSettingsRepository(session)

    async def add_record(self, user_id: uuid.UUID, data: CoffeeRecordCreate) -> CoffeeRecord:
        """Добавление записи; несколько записей за день суммируются"""
        tz = resolve_timezone(data.timezone, data.timestamp)

        if data.timestamp is None:
            moment = datetime.now(tz)
        elif data.timestamp.tzinfo is None:
            moment = data.timestamp.replace(tzinfo=tz)
        else:
            moment = data.timestamp

        record_date = data.date or moment.astimezone(tz).date()
        today = datetime.now(tz).date()
        if record_date > today:
            raise ValidationError("Date cannot be in the future")

        record = CoffeeRecord(
            user_id=user_id,
            date=record_date,
            cups=data.cups,
            timestamp=moment.astimezone(timezone.utc),
            coffee_type=data.coffee_type,
            size=data.size,
            location=data.location,
            notes=data.notes
        )

        created = await self.record_repository.create(record)
        await self.session.commit()

        logger.info(f"User {user_id} logged {created.cups} cup(s) for {created.date}")
        return created

    async def list_records(self, user_id: uuid.UUID, month: Optional[str] = None) -> List[CoffeeRecord]:
        """Записи за месяц или последние 30 записей"""
        if month:
            start, end = parse_month(month)
            return await self.record_repository.get_between(user_id, start, end)

        return await self.record_repository.get_recent(user_id, RECENT_RECORDS_LIMIT)

    async def delete_record(self, record_id: int, user_id: uuid.UUID) -> None:
        """Удаление записи владельцем"""
        record = await self.record_repository.get_by_id(record_id)

        # Чужая запись неотличима от отсутствующей
        if not record or not record.is_owned_by(user_id):
            raise NotFoundError("Coffee record not found")

        await self.record_repository.delete(record_id)
        await self.session.commit()

    async def get_stats(self, user_id: uuid.UUID, days: int = 30, tz_name: Optional[str] = None) -> dict:
        """Статистика за последние ``days`` дней"""
        tz = resolve_timezone(tz_name)
        today = datetime.now(tz).date()
        start = today - timedelta(days=days - 1)

        records = await self.record_repository.get_between(user_id, start, today)

        return {
            "summary": stats.summary(records, today, days),
            "daily": stats.daily_breakdown(records),
            "hourly": stats.hourly_distribution(records, tz),
            "weekday": stats.weekday_pattern(records),
            "monthly": stats.monthly_trend(records),
        }

    async def get_settings(self, user_id: uuid.UUID) -> CoffeeSettings:
        settings = await self.settings_repository.get_by_user(user_id)
        return settings or CoffeeSettings.defaults(user_id)

    async def update_settings(self, user_id: uuid.UUID, data: CoffeeSettingsUpdate) -> CoffeeSettings:
        """Обновление лимитов"""
        settings = await self.get_settings(user_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(settings, field, value)

        if settings.warning_threshold > settings.daily_limit:
            raise ValidationError("Warning threshold cannot exceed the daily limit")

        updated = await self.settings_repository.upsert(settings)
        await self.session.commit()
        return updated

    async def get_today_status(self, user_id: uuid.UUID, tz_name: Optional[str] = None) -> dict:
        """Сколько выпито сегодня и можно ли ещё"""
        tz = resolve_timezone(tz_name)
        today = datetime.now(tz).date()

        settings = await self.get_settings(user_id)
        today_total = await self.record_repository.sum_cups_on(user_id, today)
        last_record = await self.record_repository.get_latest_by_timestamp(user_id)

        status = {
            "date": today,
            "today_total": today_total,
            "daily_limit": settings.daily_limit,
            "warning_threshold": settings.warning_threshold,
            "is_over_limit": today_total >= settings.daily_limit,
            "should_warn": today_total >= settings.warning_threshold,
            "remaining_cups": max(0, settings.daily_limit - today_total),
            "hours_since_last": None,
            "can_drink": True,
            "next_allowed_in_hours": 0.0,
        }

        if last_record:
            elapsed = datetime.now(timezone.utc) - last_record.timestamp_utc
            hours_since = elapsed.total_seconds() / 3600
            min_interval_hours = settings.min_interval / 60

            status["hours_since_last"] = stats.round_half_up(hours_since, 1)
            status["can_drink"] = hours_since >= min_interval_hours
            status["next_allowed_in_hours"] = stats.round_half_up(max(0.0, min_interval_hours - hours_since), 1)

        return status
