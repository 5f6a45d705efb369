"""
app/repositories package marker.
"""

from app.repositories.user_repository import UserRepository
from app.repositories.user_settings_repository import UserSettingsRepository

__all__ = [
    "UserRepository",
    "UserSettingsRepository",
]
