"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.user import User
from db.models.user_settings import UserSettings

__all__ = [
    "User",
    "UserSettings",
]
