"""Tests for the authentication pipeline."""

import base64

import pytest

from auth import (
    AuthenticationPipeline,
    CredentialMatcher,
    InternalAuthError,
    InvalidCredentials,
    LogSink,
    MissingCredentials,
    RateLimited,
)

CLIENT = "192.0.2.10"


def test_successful_login(pipeline, rate_limiter):
    outcome = pipeline.authenticate("alice", "password123", CLIENT)

    assert outcome.succeeded
    assert outcome.account.id == 1

    response = outcome.to_response()
    assert response["success"] is True
    assert response["message"] == "Login successful"
    assert response["user"] == {"id": 1, "username": "alice", "email": "alice@example.com"}
    assert response["token"]

    assert not rate_limiter.has_entry(CLIENT)


def test_token_is_bound_to_account_and_time(pipeline, clock):
    outcome = pipeline.authenticate("bob", "securepass", CLIENT)

    account_id, issued_ms, nonce = base64.b64decode(outcome.token).decode().split(":")
    assert int(account_id) == 2
    assert int(issued_ms) == int(clock.now * 1000)
    assert nonce


def test_tokens_differ_between_logins(pipeline):
    first = pipeline.authenticate("alice", "password123", CLIENT).token
    second = pipeline.authenticate("alice", "password123", CLIENT).token

    assert first != second


@pytest.mark.parametrize(
    "identifier, secret",
    [(None, None), ("", ""), ("alice", ""), ("", "password123"), (None, "password123"), ("alice", None)],
)
def test_missing_credentials_do_not_spend_attempts(pipeline, rate_limiter, sink, identifier, secret):
    with pytest.raises(MissingCredentials) as exc_info:
        pipeline.authenticate(identifier, secret, CLIENT)

    assert exc_info.value.status_code == 400
    assert rate_limiter.attempt_count(CLIENT) == 0
    assert "Login failed - missing credentials" in sink.messages("warn")


def test_case_difference_fails_and_is_diagnosed(pipeline, sink):
    with pytest.raises(InvalidCredentials):
        pipeline.authenticate("charlie", "charlie456", CLIENT)

    record = sink.records[-1]
    assert record.level == "warn"
    assert record.message == "Login failed - credentials mismatch (possible case/whitespace issue)"
    assert record.data["storedUsername"] == "Charlie"
    assert record.data["hint"] == "Username exists with different casing or whitespace"


def test_trailing_space_is_required(pipeline, sink):
    with pytest.raises(InvalidCredentials):
        pipeline.authenticate("david", "david789", CLIENT)

    record = sink.records[-1]
    assert record.data["storedUsernameLength"] == 6
    assert record.data["providedUsernameLength"] == 5

    outcome = pipeline.authenticate("david ", "david789", CLIENT)
    assert outcome.account.id == 4


def test_unknown_user_is_logged_separately(pipeline, sink):
    with pytest.raises(InvalidCredentials) as exc_info:
        pipeline.authenticate("mallory", "hunter2", CLIENT)

    assert exc_info.value.message == "Invalid username or password"
    assert sink.records[-1].message == "Login failed - user not found"


def test_rate_limited_after_three_failures(pipeline, rate_limiter, clock):
    for _ in range(3):
        with pytest.raises(InvalidCredentials):
            pipeline.authenticate("charlie", "charlie456", CLIENT)
        clock.advance(5)

    with pytest.raises(RateLimited) as exc_info:
        pipeline.authenticate("alice", "password123", CLIENT)

    assert 1 <= exc_info.value.reset_in <= 60
    assert exc_info.value.to_payload()["resetIn"] == exc_info.value.reset_in
    # Blocked attempts are not recorded
    assert rate_limiter.attempt_count(CLIENT) == 3

    clock.advance(61)
    outcome = pipeline.authenticate("alice", "password123", CLIENT)
    assert outcome.succeeded


def test_rate_limited_attempt_skips_matching(pipeline, sink):
    for _ in range(3):
        with pytest.raises(InvalidCredentials):
            pipeline.authenticate("nobody", "x", CLIENT)

    sink.clear()
    with pytest.raises(RateLimited):
        pipeline.authenticate("nobody", "x", CLIENT)

    assert sink.messages() == [
        "Login attempt received",
        "Login blocked - rate limit exceeded",
    ]


def test_success_wipes_earlier_failures(pipeline, rate_limiter):
    for _ in range(2):
        with pytest.raises(InvalidCredentials):
            pipeline.authenticate("alice", "nope", CLIENT)

    pipeline.authenticate("alice", "password123", CLIENT)

    assert rate_limiter.admit(CLIENT).remaining_attempts == 3


def test_every_step_is_logged(pipeline, sink):
    pipeline.authenticate("alice", "password123", CLIENT)

    assert sink.messages() == [
        "Login attempt received",
        "Login attempt recorded",
        "Login successful",
    ]
    for record in sink.records:
        assert record.data["username"] == "alice"
        assert record.data["clientIP"] == CLIENT
        assert record.timestamp
    assert sink.records[-1].data["userId"] == 1


class _BrokenMatcher:
    def match(self, identifier, secret):
        raise RuntimeError("directory unavailable")


def test_unexpected_fault_becomes_internal_error(rate_limiter, sink):
    pipeline = AuthenticationPipeline(rate_limiter, _BrokenMatcher(), sink)

    with pytest.raises(InternalAuthError) as exc_info:
        pipeline.authenticate("alice", "password123", CLIENT)

    assert exc_info.value.status_code == 500
    record = sink.records[-1]
    assert record.level == "error"
    assert "directory unavailable" in record.data["error"]
    assert "RuntimeError" in record.data["traceback"]


class _FailingSink(LogSink):
    def _append(self, record):
        raise OSError("disk full")


def test_failing_event_log_still_yields_internal_error(rate_limiter, directory, caplog):
    pipeline = AuthenticationPipeline(rate_limiter, CredentialMatcher(directory), _FailingSink())

    with caplog.at_level("ERROR", logger="auth.pipeline"):
        with pytest.raises(InternalAuthError) as exc_info:
            pipeline.authenticate("mallory", "x", CLIENT)

    assert isinstance(exc_info.value.__cause__, OSError)
    fallback = [r for r in caplog.records if r.name == "auth.pipeline"]
    assert fallback and fallback[0].exc_info is not None
    assert "event log unavailable" in fallback[0].getMessage()
