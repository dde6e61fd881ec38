"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 5000
    # Comma-separated; "*" allows any origin.
    CORS_ORIGINS: str = "*"

    # Postgres: a full DATABASE_URL wins over the individual DB_* fields.
    DATABASE_URL: str | None = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "postgres"
    DB_USER: str = "postgres"
    DB_PASS: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("DB_PASS", "DB_PASSWORD"),
    )
    # "false" disables TLS; anything else (or unset) enables it.
    DB_SSL: str | None = None
    # When False, TLS is used without certificate validation (sslmode=require).
    DB_SSL_VERIFY: bool = True

    # Rewrite the database host to its IPv4 address before connecting.
    DB_RESOLVE_IPV4: bool = True
    # What to do when IPv4 resolution fails: keep the original host or abort.
    DB_IPV4_FALLBACK: Literal["original", "abort"] = "original"

    DB_CONNECT_RETRIES: int = 5
    DB_CONNECT_RETRY_DELAY_SEC: float = 1.5
    # When False the service starts degraded if the database is unreachable.
    DB_REQUIRED_ON_STARTUP: bool = False

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 1440
    AUTH_TOKENS_ENABLED: bool = True
    # Answer "not found" and "wrong password" with the same message.
    AUTH_GENERIC_ERRORS: bool = False

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://)"
            )
        return v.strip()

    @field_validator("DB_HOST", "DB_NAME", "DB_USER")
    @classmethod
    def validate_db_field(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DB_HOST, DB_NAME and DB_USER must be non-empty")
        return v.strip()

    @field_validator("DB_PORT", "PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("Ports must be between 1 and 65535")
        return v

    @field_validator("DB_SSL")
    @classmethod
    def validate_db_ssl(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("DB_CONNECT_RETRIES")
    @classmethod
    def validate_connect_retries(cls, v: int) -> int:
        if v < 1 or v > 50:
            raise ValueError("DB_CONNECT_RETRIES must be between 1 and 50")
        return v

    @field_validator("DB_CONNECT_RETRY_DELAY_SEC")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        if v < 0 or v > 60:
            raise ValueError("DB_CONNECT_RETRY_DELAY_SEC must be between 0 and 60")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @property
    def tls_enabled(self) -> bool:
        """TLS is on unless DB_SSL is explicitly "false"."""
        return (self.DB_SSL or "").lower() != "false"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
