"""FastAPI application factory. No business logic; only wiring, lifespan and middleware."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio.to_thread
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from emilyloja.api import router
from emilyloja.core.config import Settings, get_settings
from emilyloja.core.database import Database
from emilyloja.core.errors import LojaError, UnexpectedError
from emilyloja.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def start_database(app: FastAPI, settings: Settings, database: Database | None = None) -> Database:
    """
    Build (unless given) and verify the database, then create missing tables.

    With DB_REQUIRED_ON_STARTUP the service refuses to start when the retry
    budget is exhausted; otherwise it starts degraded and DB routes fail per
    request.
    """
    if database is None:
        database = Database.from_settings(settings)
    app.state.database = database

    attempts = settings.DB_CONNECT_RETRIES
    delay = settings.DB_CONNECT_RETRY_DELAY_SEC
    if settings.DB_REQUIRED_ON_STARTUP:
        database.establish_or_raise(attempts=attempts, delay=delay)
    elif not database.establish(attempts=attempts, delay=delay):
        logger.warning("Starting without a database connection; DB routes will fail until it recovers")

    if database.ready:
        database.create_schema()
    return database


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Create the API. Pass database to reuse an existing engine (tests, scripts)."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # DNS lookup and retry sleeps block; keep them off the event loop.
        db = await anyio.to_thread.run_sync(start_database, app, settings, database)
        try:
            yield
        finally:
            db.dispose()

    app = FastAPI(
        title="EmilyLoja API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @app.exception_handler(LojaError)
    async def handle_loja_error(request: Request, exc: LojaError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"erro": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code, content={"erro": exc.detail}, headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"erro": "Requisição inválida."})

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        # Full detail goes to the log only; clients get a generic message.
        logger.error(
            "Store error in %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"erro": UnexpectedError().message})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error in %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(status_code=500, content={"erro": UnexpectedError().message})

    app.include_router(router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Liveness route."""
        return {"message": "API da EmilyLoja está online!"}

    return app
