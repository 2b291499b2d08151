"""
Login Router

HTTP entry point for the authentication pipeline.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from auth import AuthenticationPipeline, get_auth_pipeline

router = APIRouter(prefix="/api", tags=["auth"])


class LoginRequest(BaseModel):
    """Credentials as submitted. Values are passed through untouched."""
    username: Optional[str] = None
    password: Optional[str] = None


def client_address(request: Request) -> str:
    """Rate-limit key for a request: the peer address."""
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


@router.post("/login")
def login(
    request: Request,
    credentials: Optional[LoginRequest] = None,
    pipeline: AuthenticationPipeline = Depends(get_auth_pipeline),
):
    """
    Authenticate a username/password pair.

    Returns:
        {"success": true, "message": ..., "user": {...}, "token": "..."}

    Raises:
        MissingCredentials (400), InvalidCredentials (401),
        RateLimited (429), InternalAuthError (500)
    """
    credentials = credentials or LoginRequest()
    outcome = pipeline.authenticate(
        credentials.username,
        credentials.password,
        client_address(request),
    )
    return outcome.to_response()
