"""
Service entrypoint. Run from project root:

  python -m emilyloja.server

Listens on HOST:PORT (defaults 0.0.0.0:5000); configuration comes from the
environment and an optional .env file. When DB_REQUIRED_ON_STARTUP is set and
the database stays unreachable, uvicorn aborts startup with a non-zero exit.
"""

import logging
import sys

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from emilyloja.core.config import get_settings
from emilyloja.main import create_app

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    app = create_app(settings)
    logger.info("Starting EmilyLoja API on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
