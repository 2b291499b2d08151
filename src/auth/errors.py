"""
Authentication Errors

Each error maps onto one HTTP response. Unknown usernames and wrong
passwords share ``InvalidCredentials`` so callers cannot tell them apart.
"""

from typing import Any, Dict, Optional


class AuthError(Exception):
    """Base class for login failures surfaced to the caller."""

    status_code: int = 400
    code: str = "AUTH_ERROR"
    message: str = "Authentication failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None

    def to_payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "code": self.code}


class MissingCredentials(AuthError):
    status_code = 400
    code = "MISSING_CREDENTIALS"
    message = "Username and password are required"


class InvalidCredentials(AuthError):
    status_code = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid username or password"


class RateLimited(AuthError):
    status_code = 429
    code = "RATE_LIMITED"

    def __init__(self, reset_in: int):
        super().__init__(f"Too many login attempts. Try again in {reset_in} seconds.")
        self.reset_in = reset_in

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"Retry-After": str(self.reset_in)}

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["resetIn"] = self.reset_in
        return payload


class InternalAuthError(AuthError):
    status_code = 500
    code = "INTERNAL_ERROR"
    message = "Internal server error"


class InvalidRequest(AuthError):
    status_code = 422
    code = "INVALID_REQUEST"
    message = "Username and password must be strings"
