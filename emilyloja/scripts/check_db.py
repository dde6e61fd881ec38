"""
Check database configuration and connectivity. Run from project root:
  python -m emilyloja.scripts.check_db [--attempts N] [--delay SECONDS]

Prints the effective target (password hidden), verifies connectivity with the
same retry loop the service uses at startup and reports the server time.
"""
import argparse
import logging
import sys

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from emilyloja.core.config import get_settings
from emilyloja.core.database import Database
from emilyloja.core.errors import DatabaseConnectionError
from emilyloja.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Check EmilyLoja database connectivity.")
    parser.add_argument("--attempts", type=int, default=settings.DB_CONNECT_RETRIES)
    parser.add_argument("--delay", type=float, default=settings.DB_CONNECT_RETRY_DELAY_SEC)
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    print(f"DATABASE_URL: {'set' if settings.DATABASE_URL else 'not set'}")
    print(f"DB_HOST: {settings.DB_HOST}")
    print(f"DB_USER: {settings.DB_USER}")
    print(f"DB_PASS: {'****' if settings.DB_PASS.get_secret_value() else 'NOT SET'}")

    try:
        database = Database.from_settings(settings)
    except DatabaseConnectionError as e:
        print(e.message, file=sys.stderr)
        return 1
    try:
        print(f"Target: {database.target.display()} (sslmode={database.target.tls_mode})")
        if not database.establish(attempts=args.attempts, delay=args.delay):
            print("Could not connect to the database.", file=sys.stderr)
            return 1
        try:
            with database.engine.connect() as conn:
                now = conn.execute(text("SELECT now()")).scalar()
        except SQLAlchemyError as e:
            logger.error("SELECT now() failed: %s", e)
            return 1
        print(f"Connection OK. Server time: {now}")
        return 0
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
