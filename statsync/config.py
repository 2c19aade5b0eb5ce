"""
statsync/config.py

Purpose:
    Central settings loading for the sync pipeline, the Korastats client and
    the read-side cache.

Dependencies:
    - pydantic-settings
    - pathlib
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# Prefer project-root .env, fallback to the current working directory.
_ROOT_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "statsync"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Korastats provider
    KORASTATS_API_ENDPOINT: str = "https://korastats.pro/pro/api.php"
    KORASTATS_API_KEY: str = ""
    KORASTATS_IMAGE_BASE_URL: str = "https://korastats.sirv.com/root"
    KORASTATS_TIMEOUT_SECONDS: float = 50.0
    KORASTATS_MAX_RETRIES: int = 3
    KORASTATS_RETRY_BASE_DELAY_SECONDS: float = 2.0
    KORASTATS_RATE_LIMIT_RPM: int = 120
    KORASTATS_MAX_CONCURRENCY: int = 5

    # Sync run lock: a running run refreshes updated_at; older locks are taken over
    SYNC_HEARTBEAT_SECONDS: int = 30
    SYNC_STALE_RUN_MINUTES: int = 30

    # Read-side cache TTLs
    CACHE_TTL_FIXTURES_SECONDS: int = 900  # 15 minutes: fixture-derived lists
    CACHE_TTL_PROFILE_SECONDS: int = 1800  # 30 minutes: entity profiles
    CACHE_TTL_AGGREGATE_SECONDS: int = 3600  # 60 minutes: standings, team stats

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": (str(_ROOT_ENV_FILE), ".env"),
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return str(self.ENVIRONMENT or "").strip().lower() == "production"


settings = Settings()
