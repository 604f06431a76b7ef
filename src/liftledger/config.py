"""Configuration settings for LiftLedger."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/liftledger/config.py
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from LIFTLEDGER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LIFTLEDGER_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote insight service
    insights_api_url: str = "http://localhost:8080/api/insights/progress"
    insights_timeout_seconds: float = 10.0
    insights_cache_ttl_seconds: float = 300.0

    # Insight gating
    insights_min_sessions: int = 8
    insights_min_duration_days: int = 14

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
