import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Estimate Service API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///data/estimates.db"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Identity provider (Supabase GoTrue)
    supabase_url: str = "http://localhost:54321"
    supabase_service_role_key: str = ""
    auth_timeout: float = 10.0

    # Estimate API client (used by the editor workspace)
    estimate_api_url: str = "http://localhost:8020/api/v1"
    estimate_api_timeout: float = 30.0

    # Client-local persisted state (estimate number sequence, signed-out lists)
    local_store_file: str = "data/local_store.json"

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_records: str = "INFO"          # Record collection operations
    log_level_auth: str = "INFO"             # Identity provider client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Warn when the identity provider is not configured."""
        if not self.supabase_service_role_key.strip():
            _config_logger.warning(
                "SUPABASE_SERVICE_ROLE_KEY is not configured; authenticated endpoints will reject all tokens."
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
