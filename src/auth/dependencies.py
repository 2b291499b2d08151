"""
FastAPI dependencies for the authentication layer.

Collaborators are built once from settings and shared across requests.
Tests swap them out through ``app.dependency_overrides``.
"""

from functools import lru_cache

from core.config import get_settings

from .accounts import AccountDirectory
from .log_sink import FileLogSink, LogSink
from .matcher import CredentialMatcher
from .pipeline import AuthenticationPipeline
from .rate_limiter import RateLimiter
from .token_issuer import TokenIssuer


@lru_cache
def get_account_directory() -> AccountDirectory:
    """Get the seeded account directory."""
    return AccountDirectory()


@lru_cache
def get_log_sink() -> LogSink:
    """Get the file-backed authentication event sink."""
    return FileLogSink(get_settings().log_file)


@lru_cache
def get_auth_pipeline() -> AuthenticationPipeline:
    """Get the authentication pipeline wired from settings."""
    settings = get_settings()
    return AuthenticationPipeline(
        rate_limiter=RateLimiter(
            window_seconds=settings.rate_limit_window_seconds,
            max_attempts=settings.rate_limit_max_attempts,
        ),
        matcher=CredentialMatcher(get_account_directory()),
        log_sink=get_log_sink(),
        token_issuer=TokenIssuer(),
    )
