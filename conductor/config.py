"""
Conductor Monitor Configuration

Settings for the delegation monitor service and CLI
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BOSS_DIR = Path.home() / ".boss-claude"


class Settings(BaseSettings):
    """Conductor Monitor Settings"""

    # Service
    service_name: str = "Conductor Monitor"
    service_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8000

    # Redis
    redis_url: str = "redis://localhost:6379"
    redis_socket_timeout: float = 5.0  # seconds
    redis_connect_timeout: float = 5.0  # seconds

    # Delegation monitoring
    alert_threshold_default: float = 0.95
    alert_min_actions: int = 10  # no alerts below this sample size
    alert_resend_seconds: int = 3600
    event_log_max: int = 1000
    alert_log_path: Path = BOSS_DIR / "conductor-alerts.log"

    # Reminders
    reminder_interval_default: int = 5

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(".env", BOSS_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
