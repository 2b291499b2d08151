"""
Authentication Pipeline

Runs one login attempt through:
validate -> rate-gate -> record attempt -> match -> finalize.

Each transition writes one record to the log sink. Failures are raised
as ``AuthError`` subclasses; the HTTP layer renders them.
"""

import traceback
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.logger import get_logger

from .accounts import Account
from .errors import AuthError, InternalAuthError, InvalidCredentials, MissingCredentials, RateLimited
from .log_sink import LogRecord, LogSink
from .matcher import CredentialMatcher, IdentifierMismatch, MatchResult, MatchSuccess
from .rate_limiter import RateLimitDecision, RateLimiter
from .token_issuer import TokenIssuer

logger = get_logger(__name__)


@dataclass
class AttemptOutcome:
    """Everything known about one login attempt. Never persisted."""
    identifier: Optional[str]
    secret: Optional[str]
    client_id: str
    decision: Optional[RateLimitDecision] = None
    match: Optional[MatchResult] = None
    account: Optional[Account] = None
    token: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return isinstance(self.match, MatchSuccess)

    def to_response(self) -> Dict[str, Any]:
        """Success payload for the HTTP layer."""
        if not self.succeeded or self.account is None:
            raise ValueError("Only successful attempts have a response payload")
        return {
            "success": True,
            "message": "Login successful",
            "user": {
                "id": self.account.id,
                "username": self.account.identifier,
                "email": self.account.contact,
            },
            "token": self.token,
        }


class AuthenticationPipeline:
    """
    Orchestrates a login attempt against injected collaborators.

    The admit -> record -> clear sequence for a client runs under the rate
    limiter's per-client lock so concurrent requests from the same address
    cannot lose updates.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        matcher: CredentialMatcher,
        log_sink: LogSink,
        token_issuer: Optional[TokenIssuer] = None,
    ):
        self.rate_limiter = rate_limiter
        self.matcher = matcher
        self.log_sink = log_sink
        self.token_issuer = token_issuer or TokenIssuer()

    def _log(self, level: str, message: str, **data: Any) -> None:
        self.log_sink.write(LogRecord(level=level, message=message, data=data))

    def authenticate(self, identifier: Optional[str], secret: Optional[str], client_id: str) -> AttemptOutcome:
        """
        Authenticate a username/password pair for a client.

        Args:
            identifier: Submitted username, exactly as received
            secret: Submitted password
            client_id: Rate-limit bucket, normally the client address

        Returns:
            The completed outcome of a successful attempt

        Raises:
            MissingCredentials: Username or password empty or absent
            RateLimited: Too many recent attempts from this client
            InvalidCredentials: No exact match
            InternalAuthError: Anything unexpected went wrong
        """
        outcome = AttemptOutcome(identifier=identifier, secret=secret, client_id=client_id)

        try:
            return self._run(outcome)
        except AuthError:
            raise
        except Exception as e:
            try:
                self._log(
                    "error",
                    "Login failed - unexpected error",
                    username=identifier,
                    clientIP=client_id,
                    error=repr(e),
                    traceback=traceback.format_exc(),
                )
            except Exception:
                # The sink itself may be what failed
                logger.exception(f"Login failed - unexpected error (event log unavailable) clientIP={client_id}")
            raise InternalAuthError() from e

    def _run(self, outcome: AttemptOutcome) -> AttemptOutcome:
        identifier, secret, client_id = outcome.identifier, outcome.secret, outcome.client_id

        self._log("info", "Login attempt received", username=identifier, clientIP=client_id)

        if not identifier or not secret:
            self._log(
                "warn",
                "Login failed - missing credentials",
                username=identifier or "empty",
                clientIP=client_id,
            )
            raise MissingCredentials()

        with self.rate_limiter.hold(client_id):
            outcome.decision = self.rate_limiter.admit(client_id)
            if not outcome.decision.allowed:
                reset_in = outcome.decision.retry_after_seconds
                self._log(
                    "warn",
                    "Login blocked - rate limit exceeded",
                    username=identifier,
                    clientIP=client_id,
                    resetIn=reset_in,
                )
                raise RateLimited(reset_in)

            self.rate_limiter.record_attempt(client_id)
            self._log(
                "info",
                "Login attempt recorded",
                username=identifier,
                clientIP=client_id,
                remainingAttempts=outcome.decision.remaining_attempts - 1,
            )

            outcome.match = self.matcher.match(identifier, secret)
            if not isinstance(outcome.match, MatchSuccess):
                self._log_failed_match(outcome)
                raise InvalidCredentials()

            self.rate_limiter.clear(client_id)

        outcome.account = outcome.match.account
        outcome.token = self.token_issuer.issue(outcome.account)

        self._log(
            "info",
            "Login successful",
            username=identifier,
            userId=outcome.account.id,
            clientIP=client_id,
        )
        return outcome

    def _log_failed_match(self, outcome: AttemptOutcome) -> None:
        match = outcome.match
        if isinstance(match, IdentifierMismatch):
            self._log(
                "warn",
                "Login failed - credentials mismatch (possible case/whitespace issue)",
                username=outcome.identifier,
                clientIP=outcome.client_id,
                hint="Username exists with different casing or whitespace",
                storedUsername=match.stored_identifier,
                storedUsernameLength=match.stored_length,
                providedUsernameLength=match.provided_length,
            )
        else:
            self._log(
                "warn",
                "Login failed - user not found",
                username=outcome.identifier,
                clientIP=outcome.client_id,
            )
