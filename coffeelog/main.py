import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from coffeelog.api.http import (
    health_router, auth_router, coffee_router, posts_router, comments_router,
    feed_router, users_router, notifications_router, uploads_router
)
from coffeelog.core.config import get_settings
from coffeelog.core.db import dispose_engine, init_engine
from coffeelog.core.exceptions import ServiceError
from coffeelog.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)

    await init_engine()
    logger.info(f"coffeelog started ({settings.environment})")
    yield
    await dispose_engine()


def _error_response(status_code: int, message: str, details=None, headers=None) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Все ошибки отдаются в виде {error, details?}"""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return _error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # Некорректные тело, параметры и id в пути: 400, а не 422
        details = [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in exc.errors()
        ]
        return _error_response(status.HTTP_400_BAD_REQUEST, "Validation error", details)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="coffeelog",
        description="Учёт выпитого кофе и лента постов",
        version="1.0.0",
        lifespan=lifespan
    )

    # Cookie-сессия требует явного списка источников
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(coffee_router)
    app.include_router(posts_router)
    app.include_router(comments_router)
    app.include_router(feed_router)
    app.include_router(users_router)
    app.include_router(notifications_router)
    app.include_router(uploads_router)

    return app


app = create_app()
