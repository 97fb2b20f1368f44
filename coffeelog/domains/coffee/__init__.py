from coffeelog.domains.coffee.entities import CoffeeRecord, CoffeeSettings
from coffeelog.domains.coffee.schemas import (
    CoffeeRecordCreate, CoffeeRecordResponse, CoffeeStatsResponse,
    CoffeeSettingsUpdate, CoffeeSettingsResponse, TodayStatusResponse
)
from coffeelog.domains.coffee.services import CoffeeService

__all__ = [
    "CoffeeRecord", "CoffeeSettings",
    "CoffeeRecordCreate", "CoffeeRecordResponse", "CoffeeStatsResponse",
    "CoffeeSettingsUpdate", "CoffeeSettingsResponse", "TodayStatusResponse",
    "CoffeeService"
]
