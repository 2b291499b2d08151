"""
Routers Package

Contains FastAPI router modules for:
- Login endpoint
- Health check
- Debug account listing
"""

from routers.debug import router as debug_router
from routers.health import router as health_router
from routers.login import router as login_router

__all__ = ["login_router", "health_router", "debug_router"]
