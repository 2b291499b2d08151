"""
Authentication Module

Login decision pipeline:
1. Input Validation - Username and password must both be present
2. Rate Limiting - Sliding window per client address
3. Credential Matching - Exact match, with diagnostics for near misses
4. Monitoring - Log every attempt and its outcome
"""

from .accounts import DEFAULT_ACCOUNTS, Account, AccountDirectory
from .dependencies import get_account_directory, get_auth_pipeline, get_log_sink
from .errors import (
    AuthError,
    InternalAuthError,
    InvalidCredentials,
    InvalidRequest,
    MissingCredentials,
    RateLimited,
)
from .log_sink import FileLogSink, LogRecord, LogSink, MemoryLogSink
from .matcher import CredentialMatcher, IdentifierMismatch, IdentifierUnknown, MatchResult, MatchSuccess
from .pipeline import AttemptOutcome, AuthenticationPipeline
from .rate_limiter import RateLimitDecision, RateLimiter
from .token_issuer import TokenIssuer

__all__ = [
    "Account",
    "AccountDirectory",
    "DEFAULT_ACCOUNTS",
    "AttemptOutcome",
    "AuthenticationPipeline",
    "AuthError",
    "CredentialMatcher",
    "FileLogSink",
    "IdentifierMismatch",
    "IdentifierUnknown",
    "InternalAuthError",
    "InvalidCredentials",
    "InvalidRequest",
    "LogRecord",
    "LogSink",
    "MatchResult",
    "MatchSuccess",
    "MemoryLogSink",
    "MissingCredentials",
    "RateLimitDecision",
    "RateLimited",
    "RateLimiter",
    "TokenIssuer",
    "get_account_directory",
    "get_auth_pipeline",
    "get_log_sink",
]
