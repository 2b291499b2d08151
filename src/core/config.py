"""
Application Configuration

Centralized configuration using Pydantic Settings for type-safe
environment variable management with validation.

Rate-limit constants are read once at startup and stay fixed for the
lifetime of the process.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory containing this file, then go up to the project root
_CONFIG_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Example: SERVER_PORT=8000 or rate_limit_max_attempts=5
    """

    model_config = SettingsConfigDict(
        env_file=_CONFIG_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    server_host: str = "0.0.0.0"
    server_port: int = 3000
    debug: bool = False

    # Logging Configuration
    log_file: str = "server.log"  # Append-only authentication event log
    log_level: str = "INFO"
    event_log_level: str = "INFO"  # Console level for authentication events

    # Rate Limiting Configuration
    rate_limit_window_seconds: float = 60.0
    rate_limit_max_attempts: int = 3

    # HTTP Surface
    cors_allowed_origins: str = "*"  # Comma-separated
    static_dir: str = "public"
    debug_endpoints: bool = True  # Expose /api/debug/users

    @property
    def static_path(self) -> Path:
        """Static directory, relative paths resolved from the project root."""
        path = Path(self.static_dir)
        return path if path.is_absolute() else _CONFIG_DIR / path


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused throughout the application lifecycle.
    """
    return Settings()


def get_allowed_origins() -> list[str]:
    """Parse allowed origins from comma-separated string."""
    settings = get_settings()
    if not settings.cors_allowed_origins:
        return []
    return [origin.strip() for origin in settings.cors_allowed_origins.split(",") if origin.strip()]
