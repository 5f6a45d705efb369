"""
app/api/routers package marker.
"""

from app.api.routers.auth_router import router as auth_router
from app.api.routers.jobs_router import router as jobs_router
from app.api.routers.user_settings_router import router as user_settings_router

__all__ = [
    "auth_router",
    "jobs_router",
    "user_settings_router",
]
