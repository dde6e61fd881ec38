"""Core app configuration, database and security."""

from emilyloja.core.config import Settings, get_settings
from emilyloja.core.database import Database, get_database, get_db

__all__ = ["Database", "Settings", "get_database", "get_db", "get_settings"]
