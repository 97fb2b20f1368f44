import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from coffeelog.core.db import ping

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Проверка состояния сервиса и базы данных"""
    try:
        await ping()
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "unavailable"})

    return {"status": "healthy", "database": "ok"}
