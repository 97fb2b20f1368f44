from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from coffeelog.core.auth import require_user_id
from coffeelog.core.db import get_db
from coffeelog.domains.coffee.schemas import (
    CoffeeRecordCreate, CoffeeRecordResponse, CoffeeStatsResponse,
    CoffeeSettingsUpdate, CoffeeSettingsResponse, TodayStatusResponse
)
from coffeelog.domains.coffee.services import CoffeeService

router = APIRouter(prefix="/coffee", tags=["coffee"])


@router.post("", response_model=CoffeeRecordResponse, status_code=status.HTTP_201_CREATED)
async def add_record(
    record_data: CoffeeRecordCreate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Добавление записи о выпитом кофе"""
    coffee_service = CoffeeService(db)
    return await coffee_service.add_record(user_id, record_data)


@router.get("", response_model=List[CoffeeRecordResponse])
async def list_records(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Записи за месяц или последние записи"""
    coffee_service = CoffeeService(db)
    return await coffee_service.list_records(user_id, month)


@router.get("/stats", response_model=CoffeeStatsResponse)
async def get_stats(
    days: int = Query(30, ge=1, le=366),
    tz: Optional[str] = Query(None, alias="timezone", max_length=64),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Статистика потребления"""
    coffee_service = CoffeeService(db)
    return await coffee_service.get_stats(user_id, days, tz)


@router.get("/today", response_model=TodayStatusResponse)
async def get_today_status(
    tz: Optional[str] = Query(None, alias="timezone", max_length=64),
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    coffee_service = CoffeeService(db)
    return await coffee_service.get_today_status(user_id, tz)


@router.get("/settings", response_model=CoffeeSettingsResponse)
async def get_settings(
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    coffee_service = CoffeeService(db)
    return await coffee_service.get_settings(user_id)


@router.put("/settings", response_model=CoffeeSettingsResponse)
async def update_settings(
    settings_data: CoffeeSettingsUpdate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Обновление дневного лимита и интервалов"""
    coffee_service = CoffeeService(db)
    return await coffee_service.update_settings(user_id, settings_data)


@router.delete("/{record_id}")
async def delete_record(
    record_id: int,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Удаление своей записи"""
    coffee_service = CoffeeService(db)
    await coffee_service.delete_record(record_id, user_id)
    return {"success": True}
