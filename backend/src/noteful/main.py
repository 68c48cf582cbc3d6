# Main application entry point
import os
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import (
    auth_router,
    folders_router,
    health_router,
    notes_router,
    tags_router,
    users_router,
)
from .config import get_settings
from .core.exceptions import InternalFailure, NotefulError, Unauthorized, ValidationError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .database import create_tables, dispose_engine

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()

# pydantic error types rendered with a fixed message
VALIDATION_MESSAGES = {
    "missing": "Missing field",
    "string_type": "Incorrect field type: expected string",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting Noteful application",
        extra={
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    )

    # Allow tests to skip touching the real DB
    if os.getenv("NOTEFUL_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to NOTEFUL_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    # Shutdown
    logger.info("Shutting down Noteful application")
    await dispose_engine()


def error_response(error: NotefulError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, Unauthorized) else None
    return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)


def _error_location(loc: tuple) -> Optional[str]:
    names = [str(part) for part in loc if isinstance(part, str) and part != "body"]
    return names[-1] if names else None


def validation_error_from(errors: List[Dict[str, Any]]) -> ValidationError:
    """Collapse pydantic's error list into the first error worth reporting.

    Missing fields are reported before type errors, matching the order in
    which the credential rules are applied.
    """
    ordered = sorted(errors, key=lambda err: err.get("type") != "missing")
    first = ordered[0] if ordered else {"type": "", "loc": (), "msg": "Invalid request"}
    message = VALIDATION_MESSAGES.get(first["type"], first.get("msg", "Invalid request"))
    return ValidationError(_error_location(tuple(first.get("loc", ()))), message)


async def noteful_error_handler(request: Request, exc: NotefulError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            exc_info=exc,
            extra={"path": request.url.path, "detail": getattr(exc, "detail", None)},
        )
    return error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = validation_error_from(list(exc.errors()))
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "location": error.location, "error": error.message},
    )
    return error_response(error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    phrase = HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": exc.status_code,
            "reason": phrase.replace(" ", ""),
            "message": exc.detail if isinstance(exc.detail, str) else phrase,
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(InternalFailure())


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant note taking API",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_exception_handler(NotefulError, noteful_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Add logging middleware
    app.add_middleware(LoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(users_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(notes_router, prefix="/api")
    app.include_router(folders_router, prefix="/api")
    app.include_router(tags_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.app_version}

    # Basic unprefixed liveness endpoint
    @app.get("/health")
    async def basic_health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("noteful.main:app", host=settings.host, port=settings.port, reload=settings.reload)
