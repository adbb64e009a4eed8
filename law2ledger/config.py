"""
config.py — Law2Ledger application settings.

Usage:
    from law2ledger.config import settings
    print(settings.session_backend)

Never use FastAPI Depends() for settings — import directly as a module-level singleton.
"""
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore any extra env vars
    )

    # --- Application ---
    app_name: str = "Law2Ledger"
    app_version: str = "0.1.0"
    debug: bool = True

    # --- CORS ---
    # Comma-separated list of allowed dashboard origins
    cors_origins: str = "http://localhost:5173,http://localhost:8080"

    # --- Session store ---
    # "memory" keeps sessions in-process (single worker); "redis" shares them
    session_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379"
    session_ttl_seconds: int = 86400   # 24 hours
    session_store_maxsize: int = 10_000   # memory backend only

    # --- Pipeline ---
    pipeline_timeout_seconds: float = 10.0
    max_suggestions: int = 6
    min_suggestion_saving: float = 1_000   # Suppress suggestions saving less than ₹1,000

    @property
    def cors_origins_list(self) -> List[str]:
        """Split comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Module-level singleton: import this throughout the codebase
settings = Settings()
