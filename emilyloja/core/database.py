"""PostgreSQL engine ownership, startup verification and session management."""

import logging
import time
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING, Any

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from emilyloja.core.connection import ConnectionTarget, build_connection_target, normalize_ipv4
from emilyloja.core.errors import DatabaseConnectionError

if TYPE_CHECKING:
    from emilyloja.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_ATTEMPTS = 5
DEFAULT_RETRY_DELAY_SEC = 1.5


def _log_engine_error(context: Any) -> None:
    # Only connections that were open and then dropped; statement errors
    # (e.g. duplicate keys) and connect-time failures are reported by callers.
    if not context.is_disconnect or context.connection is None:
        return
    logger.error(
        "Lost database connection (%s): %s",
        type(context.original_exception).__name__,
        context.original_exception,
    )


def _log_pool_invalidate(dbapi_connection: Any, connection_record: Any, exception: BaseException | None) -> None:
    if exception is not None:
        logger.error("Unexpected error on pooled connection, discarding it: %s", exception)


def register_error_listeners(engine: Engine) -> None:
    """Log errors raised by connections (including idle pooled ones) without re-raising."""
    event.listen(engine, "handle_error", _log_engine_error)
    event.listen(engine.pool, "invalidate", _log_pool_invalidate)


class Database:
    """
    Owned database resource: engine, session factory and readiness flag.

    Built once per process by the application lifespan and shared through
    app.state; never a module-level singleton.
    """

    def __init__(self, engine: Engine, target: ConnectionTarget | None = None) -> None:
        self.engine = engine
        self.target = target
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self.ready = False
        register_error_listeners(engine)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Database":
        """Assemble the target (IPv4-normalized if enabled) and create the engine."""
        target = build_connection_target(settings)
        if settings.DB_RESOLVE_IPV4:
            target = normalize_ipv4(target, policy=settings.DB_IPV4_FALLBACK)
        logger.info("Database target: %s (sslmode=%s)", target.display(), target.tls_mode)
        engine = create_engine(
            target.url,
            connect_args=target.connect_args(),
            pool_pre_ping=True,
            echo=settings.DEBUG,
        )
        return cls(engine, target)

    def establish(
        self,
        attempts: int = DEFAULT_CONNECT_ATTEMPTS,
        delay: float = DEFAULT_RETRY_DELAY_SEC,
        sleep: Callable[[float], None] = time.sleep,
    ) -> bool:
        """
        Verify connectivity with SELECT 1, retrying up to attempts times.

        Waits a fixed delay between attempts. Returns False after the last
        failure instead of raising; the caller decides whether to abort.
        """
        for attempt in range(1, attempts + 1):
            try:
                with self.engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
            except SQLAlchemyError as e:
                logger.error(
                    "Attempt %d/%d: could not connect to the database: %s", attempt, attempts, e
                )
                if attempt < attempts:
                    sleep(delay)
                continue
            logger.info("Database connection OK (attempt %d/%d)", attempt, attempts)
            self.ready = True
            return True
        logger.error("Could not connect to the database after %d attempts", attempts)
        self.ready = False
        return False

    def establish_or_raise(self, attempts: int, delay: float) -> None:
        if not self.establish(attempts=attempts, delay=delay):
            raise DatabaseConnectionError(
                "Não foi possível conectar ao banco após várias tentativas."
            )

    def create_schema(self) -> bool:
        """Create missing tables (idempotent). Logs and returns False on failure."""
        # Import models so that Base.metadata contains every table.
        from emilyloja.models import Base

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error("Could not create tables: %s", e)
            return False
        logger.info("Tables verified/created: %s", ", ".join(sorted(Base.metadata.tables)))
        return True

    def check_connected(self) -> bool:
        """Run a trivial query to verify the database is reachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error("Health check query failed: %s", e)
            return False

    def session(self) -> Generator[Session, None, None]:
        """Yield a session and close it when done."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency: the Database owned by the running application."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseConnectionError("Banco de dados não inicializado.")
    return database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    yield from get_database(request).session()
