"""
Settings for the bookkeeping service.

Values come from the process environment, optionally seeded
from a .env file in the working directory.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Environment-backed settings. Read once per process via get_settings()."""

    def __init__(self):
        self.APP_NAME: str = os.getenv("APP_NAME", "Bookkeeping Service")
        self.APP_VERSION: str = os.getenv("APP_VERSION", "0.1.0")
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
        self.DEBUG: bool = _env_bool("DEBUG")

        self.HOST: str = os.getenv("HOST", "127.0.0.1")
        self.PORT: int = int(os.getenv("PORT", "8000"))

        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL", "sqlite:///./bookkeeping.db"
        )

        level = os.getenv("LOG_LEVEL", "DEBUG" if self.DEBUG else "INFO").upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got {level!r}"
            )
        self.LOG_LEVEL: str = level

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
