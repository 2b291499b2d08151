"""
Login Sentinel

FastAPI application for username/password verification with a
per-client rate limit and a detailed authentication event log.

Seeded accounts deliberately include usernames with unexpected casing
and surrounding whitespace. Matching is exact, so those logins fail
unless typed exactly; the log explains why.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 3000 --reload

Or run directly:
    python main.py
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from auth import (
    AuthError,
    FileLogSink,
    InternalAuthError,
    InvalidRequest,
    get_account_directory,
    get_log_sink,
)
from core.config import get_allowed_origins, get_settings
from core.logger import get_logger, setup_logging
from routers import debug_router, health_router, login_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Starts the event log and prints the seeded test accounts.
    """
    settings = get_settings()

    setup_logging(
        "DEBUG" if settings.debug else settings.log_level,
        event_level=settings.event_log_level,
    )

    sink = get_log_sink()
    if isinstance(sink, FileLogSink):
        sink.start()

    logger.info("=" * 60)
    logger.info("Login Sentinel Starting")
    logger.info("=" * 60)
    logger.info(f"Server running at http://{settings.server_host}:{settings.server_port}")
    logger.info(f"Event log: {settings.log_file}")
    logger.info(
        f"Rate limit: {settings.rate_limit_max_attempts} attempts "
        f"per {settings.rate_limit_window_seconds:g}s"
    )
    logger.info(f"Debug endpoints: {'Enabled' if settings.debug_endpoints else 'Disabled'}")
    logger.info("Test users:")
    for account in get_account_directory():
        logger.info(f"  {account.identifier!r} / {account.secret}")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Login Sentinel",
    description="""
    Credential verification service.

    ## Endpoints

    - `POST /api/login` - `{"username": "...", "password": "..."}`
    - `GET /api/health` - Liveness probe
    - `GET /api/debug/users` - Stored usernames with length and hex bytes

    ## Error codes

    - `MISSING_CREDENTIALS` (400)
    - `INVALID_CREDENTIALS` (401)
    - `RATE_LIMITED` (429, includes `resetIn` seconds)
    - `INVALID_REQUEST` (422, non-string username or password)
    - `INTERNAL_ERROR` (500)
    """,
    version="1.0.0",
    lifespan=lifespan,
)

settings = get_settings()

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_payload(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    error = InvalidRequest()
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    error = InternalAuthError()
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


app.include_router(login_router)
app.include_router(health_router)
app.include_router(debug_router)

# Front-end assets, mounted last so API routes take precedence
_static_dir = settings.static_path
if _static_dir.is_dir():
    app.mount("/", StaticFiles(directory=_static_dir, html=True), name="static")
else:
    logger.warning(f"Static directory not found, front-end disabled: {_static_dir}")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
