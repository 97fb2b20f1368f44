from datetime import date as date_type, datetime, timezone
from typing import Optional, List
import uuid

from pydantic import Field, field_validator

from coffeelog.core.schemas import CamelModel

MAX_CUPS_PER_RECORD = 100


class CoffeeRecordCreate(CamelModel):
    """Схема для добавления записи"""
    cups: int = Field(..., gt=0, le=MAX_CUPS_PER_RECORD)
    date: Optional[date_type] = None
    timestamp: Optional[datetime] = None
    timezone: Optional[str] = Field(None, max_length=64)
    coffee_type: Optional[str] = Field(None, max_length=50)
    size: Optional[str] = Field(None, max_length=10)
    location: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)


class CoffeeRecordResponse(CamelModel):
    id: int
    user_id: uuid.UUID
    date: date_type
    cups: int
    timestamp: datetime
    coffee_type: Optional[str] = None
    size: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    @field_validator('timestamp')
    @classmethod
    def ensure_utc(cls, v):
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class DailyTotal(CamelModel):
    date: date_type
    cups: int
    records: int


class HourlyBucket(CamelModel):
    hour: int
    count: int
    percentage: int


class WeekdayBucket(CamelModel):
    day: int
    total_cups: int
    day_count: int
    avg_cups: float


class MonthlyTotal(CamelModel):
    month: str
    cups: int


class StatsSummary(CamelModel):
    total_cups: int
    record_days: int
    active_days: int
    avg_per_day: float
    max_per_day: int
    weekly_average: float


class CoffeeStatsResponse(CamelModel):
    summary: StatsSummary
    daily: List[DailyTotal]
    hourly: List[HourlyBucket]
    weekday: List[WeekdayBucket]
    monthly: List[MonthlyTotal]


class CoffeeSettingsUpdate(CamelModel):
    daily_limit: Optional[int] = Field(None, ge=1, le=50)
    warning_threshold: Optional[int] = Field(None, ge=1, le=50)
    min_interval: Optional[int] = Field(None, ge=0, le=1440)


class CoffeeSettingsResponse(CamelModel):
    daily_limit: int
    warning_threshold: int
    min_interval: int


class TodayStatusResponse(CamelModel):
    date: date_type
    today_total: int
    daily_limit: int
    warning_threshold: int
    is_over_limit: bool
    should_warn: bool
    remaining_cups: int
    hours_since_last: Optional[float] = None
    can_drink: bool
    next_allowed_in_hours: float = 0.0
