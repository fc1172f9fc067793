from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, blank_to_none

class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration (Postgres is used when host and db name are provided)
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_HOST: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str | None = None

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # Fallback database when Postgres is not configured
    SQLITE_URL: str = "sqlite+aiosqlite:///./social_api.db"

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    CREATE_SCHEMA_ON_STARTUP: bool = True

    # Account creation and deletion run under this isolation level (None keeps the driver default)
    ACCOUNT_WRITE_ISOLATION_LEVEL: str | None = "SERIALIZABLE"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/social_api")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - Postgres when POSTGRES_HOST and POSTGRES_DB are set. With `TESTING=True` and
          `TEST_POSTGRES_DB` provided, the test database name is used instead.
        - Otherwise the SQLite fallback (`SQLITE_URL`).
        """
        if not (self.POSTGRES_HOST and self.POSTGRES_DB):
            return self.SQLITE_URL

        db_name = self.TEST_POSTGRES_DB if (self.TESTING and self.TEST_POSTGRES_DB) else self.POSTGRES_DB
        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{db_name}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation, since the logging
        system expects level names like "DEBUG" or "INFO".
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("ACCOUNT_WRITE_ISOLATION_LEVEL", mode="before")
    def normalize_isolation_level(cls, v: str | None) -> str | None:
        # "" or "none" in the environment disables the isolation override
        return to_uppercase(blank_to_none(v))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is good for performance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
