"""
app/schemas package marker.
"""

from app.schemas.auth import AuthUserResponse, LoginRequest, LoginResponse, SignupRequest
from app.schemas.jobs import JobsErrorResponse, JobsResponse
from app.schemas.user_settings import (
    UserSettingsResponse,
    UserSettingsUpdateResponse,
    VisibleColumnsPayload,
)

__all__ = [
    "AuthUserResponse",
    "JobsErrorResponse",
    "JobsResponse",
    "LoginRequest",
    "LoginResponse",
    "SignupRequest",
    "UserSettingsResponse",
    "UserSettingsUpdateResponse",
    "VisibleColumnsPayload",
]
