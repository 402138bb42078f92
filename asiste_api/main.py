"""
Asiste Health Care API

REST backend for the marketing site: contact form, customer reviews, blog,
and the admin panel behind them.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from asiste_api.config import Settings, get_settings
from asiste_api.errors import ApiError
from asiste_api.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
    request_id_var,
)
from asiste_api.routers import admin, blog, contact, reviews
from asiste_api.services.database import Database
from asiste_api.services.notifications import Notifier

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def _validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append({"field": ".".join(loc), "message": error.get("msg", "")})
    return details


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": _validation_details(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths look the same
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.error(
            "Data store error on %s %s (request %s)",
            request.method,
            request.url.path,
            request_id_var.get(),
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    notifier: Notifier | None = None,
) -> FastAPI:
    """Build the application around explicitly supplied collaborators.

    Anything not passed in is built from ``settings`` (environment by
    default), so tests can substitute a throwaway database or a fake
    notifier.
    """
    settings = settings or get_settings()
    database = database or Database(settings.database_url, settings.db_pool_size)
    notifier = notifier or Notifier(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan: startup and shutdown."""
        if await database.ping():
            logger.info("Database pool connected successfully")
        else:
            logger.error("Error connecting to database pool")
        logger.info("Frontend URL: %s", settings.frontend_url)
        yield
        await database.dispose()

    app = FastAPI(
        title="Asiste Health Care API",
        description="Contact form, reviews and blog backend for the Asiste Health Care site",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.notifier = notifier

    # Last added is outermost: request ID, CORS, security headers, then the
    # catch-all 500 so even crashes get the headers added by the outer layers
    app.add_middleware(
        UnhandledErrorMiddleware, expose_detail=settings.is_development
    )
    app.add_middleware(
        SecurityHeadersMiddleware, hsts=settings.environment == "production"
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    _register_exception_handlers(app)

    app.include_router(contact.router, prefix="/api")
    app.include_router(reviews.router, prefix="/api")
    app.include_router(blog.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check including a data store ping."""
        database_ok = await database.ping()
        if not database_ok:
            logger.warning("Health check degraded: database unreachable")
        return {
            "status": "OK" if database_ok else "degraded",
            "message": "Server is running",
            "checks": {"database": "ok" if database_ok else "fail"},
        }

    return app


app = create_app()
