"""
API routers.
"""

from app.routers.applications import router as applications_router
from app.routers.auth import router as auth_router

__all__ = ["applications_router", "auth_router"]
