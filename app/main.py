import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.http import auth_router, health_router, posts_router
from app.core.config import get_settings
from app.core.db import init_models
from app.core.errors import AppError, InternalError, ValidationError
from app.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    yield


async def app_error_handler(request: Request, exc: AppError):
    if exc.status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}")
    return JSONResponse(status_code=int(exc.status), content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
    error = ValidationError(f"Invalid fields: {', '.join(fields)}")
    return JSONResponse(status_code=int(error.status), content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception):
    # Ошибки БД и провайдера медиа попадают сюда
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = InternalError()
    return JSONResponse(status_code=int(error.status), content=error.to_dict())


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Blog API",
        description="Бэкенд блога: пользователи, сессии в cookie и посты с обложками",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Cookie с токеном требует credentials и явного списка доменов
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(posts_router)

    return app


app = create_app()


def run() -> None:
    """Запуск uvicorn на хосте и порту из настроек"""
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
