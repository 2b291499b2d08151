"""Pytest configuration and fixtures for login_sentinel tests."""

import pytest
from fastapi.testclient import TestClient

from auth import (
    AccountDirectory,
    AuthenticationPipeline,
    CredentialMatcher,
    MemoryLogSink,
    RateLimiter,
    TokenIssuer,
    get_auth_pipeline,
)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def directory():
    return AccountDirectory()


@pytest.fixture
def rate_limiter(clock):
    return RateLimiter(window_seconds=60, max_attempts=3, clock=clock)


@pytest.fixture
def sink():
    return MemoryLogSink()


@pytest.fixture
def pipeline(rate_limiter, directory, sink, clock):
    return AuthenticationPipeline(
        rate_limiter=rate_limiter,
        matcher=CredentialMatcher(directory),
        log_sink=sink,
        token_issuer=TokenIssuer(clock=clock),
    )


@pytest.fixture
def client(pipeline):
    """HTTP client wired to the in-memory pipeline. Lifespan is not run."""
    from main import app

    app.dependency_overrides[get_auth_pipeline] = lambda: pipeline
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
