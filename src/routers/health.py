"""Health check endpoint."""

from fastapi import APIRouter

from auth.log_sink import utc_now_iso

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness probe for container orchestration."""
    return {"status": "ok", "timestamp": utc_now_iso()}
