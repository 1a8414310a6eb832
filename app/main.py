from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import Settings, settings as app_settings
from app.database import engine, init_models
from app.errors import APIError, InternalError, ValidationError
from app.logging_setup import setup_logging
from app.middleware import add_middleware
from app.routers.auth import router as auth_router
from app.routers.health import router as health_router
from app.routers.tasks import router as tasks_router
from app.schemas.response import error_response
from app.utils.validation import format_validation_errors

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("startup_complete", database=app_settings.DATABASE_NAME)

    yield

    await engine.dispose()
    logger.info("shutdown_complete")


async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, exc.errors),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return await api_error_handler(request, ValidationError(format_validation_errors(exc)))


async def internal_error_handler(request: Request, exc: Exception):
    # Details stay in the server log; clients get the generic message
    logger.exception("unhandled_exception", path=request.url.path, exc_info=exc)
    error = InternalError()
    return JSONResponse(
        status_code=error.status_code,
        content=error_response(error.message),
    )


def create_app(settings: Settings = app_settings) -> FastAPI:
    setup_logging(settings.LOG_LEVEL, json_logs=settings.is_release)

    app = FastAPI(
        lifespan=lifespan,
        title="Task API",
        description="Session-authenticated task management API",
        version="1.0.0",
        docs_url=None if settings.is_release else "/docs",
        redoc_url=None if settings.is_release else "/redoc",
        openapi_url=None if settings.is_release else "/openapi.json",
    )

    add_middleware(app, settings)

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(tasks_router)

    return app


app = create_app()
