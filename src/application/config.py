"""Application configuration using Pydantic Settings."""

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "booklore-session-tracker"
    app_version: str = "0.1.0"
    debug: bool = False

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Reading-session backend
    backend_base_url: str = "http://localhost:6060"
    sessions_path: str = "/api/v1/reading-sessions"
    backend_auth_token: Optional[str] = None
    request_timeout_seconds: float = 10.0

    # Beacon delivery on teardown
    beacon_timeout_seconds: float = 5.0
    beacon_queue_size: int = 100

    # Dispatcher configuration
    dispatcher_type: Literal["http", "local"] = "http"

    # Session accounting
    reading_checkpoint_interval_seconds: float = 300
    listening_checkpoint_interval_seconds: float = 300
    min_session_seconds: int = 30


# Create a singleton instance
settings = Settings()
