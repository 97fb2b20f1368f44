from datetime import date
from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
import uuid

from coffeelog.db.models.coffee import CoffeeRecord as CoffeeRecordModel, CoffeeSettings as CoffeeSettingsModel

if TYPE_CHECKING:
    from coffeelog.domains.coffee.entities import CoffeeRecord, CoffeeSettings


class CoffeeRecordRepository:
    """Репозиторий для работы с записями о кофе"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, record: "CoffeeRecord") -> "CoffeeRecord":
        """Создание записи"""
        db_record = CoffeeRecordModel(
            user_id=record.user_id,
            date=record.date,
            cups=record.cups,
            timestamp=record.timestamp,
            coffee_type=record.coffee_type,
            size=record.size,
            location=record.location,
            notes=record.notes
        )

        self.session.add(db_record)
        await self.session.flush()
        await self.session.refresh(db_record)
        return self._to_domain(db_record)

    async def get_by_id(self, record_id: int) -> Optional["CoffeeRecord"]:
        db_record = await self.session.get(CoffeeRecordModel, record_id)
        return self._to_domain(db_record) if db_record else None

    async def delete(self, record_id: int) -> bool:
        result = await self.session.execute(
            delete(CoffeeRecordModel).where(CoffeeRecordModel.id == record_id)
        )
        return result.rowcount > 0

    async def get_between(self, user_id: uuid.UUID, start: date, end: date) -> List["CoffeeRecord"]:
        """Записи пользователя с датой в диапазоне [start, end]"""
        result = await self.session.execute(
            select(CoffeeRecordModel)
            .where(
                CoffeeRecordModel.user_id == user_id,
                CoffeeRecordModel.date >= start,
                CoffeeRecordModel.date <= end
            )
            .order_by(CoffeeRecordModel.date.desc(), CoffeeRecordModel.timestamp.desc())
        )
        return [self._to_domain(record) for record in result.scalars().all()]

    async def get_recent(self, user_id: uuid.UUID, limit: int = 30) -> List["CoffeeRecord"]:
        """Последние записи пользователя по дате"""
        result = await self.session.execute(
            select(CoffeeRecordModel)
            .where(CoffeeRecordModel.user_id == user_id)
            .order_by(CoffeeRecordModel.date.desc(), CoffeeRecordModel.timestamp.desc())
            .limit(limit)
        )
        return [self._to_domain(record) for record in result.scalars().all()]

    async def get_latest_by_timestamp(self, user_id: uuid.UUID) -> Optional["CoffeeRecord"]:
        result = await self.session.execute(
            select(CoffeeRecordModel)
            .where(CoffeeRecordModel.user_id == user_id)
            .order_by(CoffeeRecordModel.timestamp.desc())
            .limit(1)
        )
        db_record = result.scalar_one_or_none()
        return self._to_domain(db_record) if db_record else None

    async def sum_cups_on(self, user_id: uuid.UUID, day: date) -> int:
        """Сумма чашек за день"""
        result = await self.session.execute(
            select(func.coalesce(func.sum(CoffeeRecordModel.cups), 0))
            .where(CoffeeRecordModel.user_id == user_id, CoffeeRecordModel.date == day)
        )
        return int(result.scalar())

    def _to_domain(self, db_record: CoffeeRecordModel) -> "CoffeeRecord":
        """Преобразование модели БД в доменную сущность"""
        from coffeelog.domains.coffee.entities import CoffeeRecord

        return CoffeeRecord(
            id=db_record.id,
            user_id=db_record.user_id,
            date=db_record.date,
            cups=db_record.cups,
            timestamp=db_record.timestamp,
            coffee_type=db_record.coffee_type,
            size=db_record.size,
            location=db_record.location,
            notes=db_record.notes,
            created_at=db_record.created_at,
            updated_at=db_record.updated_at
        )


class CoffeeSettingsRepository:
    """Репозиторий для настроек лимитов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user(self, user_id: uuid.UUID) -> Optional["CoffeeSettings"]:
        result = await self.session.execute(
            select(CoffeeSettingsModel).where(CoffeeSettingsModel.user_id == user_id)
        )
        db_settings = result.scalar_one_or_none()
        return self._to_domain(db_settings) if db_settings else None

    async def upsert(self, settings: "CoffeeSettings") -> "CoffeeSettings":
        """Создание или обновление настроек пользователя"""
        result = await self.session.execute(
            select(CoffeeSettingsModel).where(CoffeeSettingsModel.user_id == settings.user_id)
        )
        db_settings = result.scalar_one_or_none()

        if db_settings is None:
            db_settings = CoffeeSettingsModel(user_id=settings.user_id)
            self.session.add(db_settings)

        db_settings.daily_limit = settings.daily_limit
        db_settings.warning_threshold = settings.warning_threshold
        db_settings.min_interval = settings.min_interval

        await self.session.flush()
        await self.session.refresh(db_settings)
        return self._to_domain(db_settings)

    def _to_domain(self, db_settings: CoffeeSettingsModel) -> "CoffeeSettings":
        from coffeelog.domains.coffee.entities import CoffeeSettings

        return CoffeeSettings(
            user_id=db_settings.user_id,
            daily_limit=db_settings.daily_limit,
            warning_threshold=db_settings.warning_threshold,
            min_interval=db_settings.min_interval,
            updated_at=db_settings.updated_at
        )
