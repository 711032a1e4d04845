# Fichier: pix_api/core/config.py
import sys
from typing import List, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str

    ENVIRONMENT: str = "development"
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:4200",
        "http://127.0.0.1:4200",
    ]

    # --- Auth ---
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # --- Airtable (référentiel pédagogique) ---
    AIRTABLE_API_URL: str = "https://api.airtable.com/v0"
    AIRTABLE_API_KEY: Optional[str] = None
    AIRTABLE_BASE: str = "test-base"
    AIRTABLE_TIMEOUT_SECONDS: float = 10.0
    AIRTABLE_PAGE_SIZE: int = 100

    # --- Cache local ---
    # 0 = les entrées n'expirent jamais (vidage manuel via DELETE /api/cache)
    CACHE_DEFAULT_TTL_SECONDS: int = 0

    # Performance instrumentation
    SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS: int = 300

    class Config:
        env_file = ".env"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        """Force the asyncpg driver on Postgres URLs.

        Hosting providers still hand out ``postgres://`` URLs, an alias that
        SQLAlchemy dropped. SQLite and other backends are left as they are.
        """

        if not isinstance(value, str) or "+asyncpg" in value:
            return value

        for prefix in ("postgres://", "postgresql://", "postgresql+psycopg2://", "postgresql+psycopg://"):
            if value.startswith(prefix):
                return "postgresql+asyncpg://" + value[len(prefix):]

        return value

    @field_validator("AIRTABLE_API_URL")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Print every missing or invalid environment variable before re-raising.

    The exception surfaces at import time, where the traceback alone rarely
    tells which variable is at fault.
    """

    print("Configuration error while loading environment variables:", file=sys.stderr)
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Unknown validation error")
        print(f"  - {location}: {message} (type={error.get('type')})", file=sys.stderr)


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
