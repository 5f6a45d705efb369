"""
Repository-layer exceptions for user and preference persistence.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for persistence failures."""


class PreferencePersistenceError(RepositoryError):
    """Raised when reading or writing user settings fails."""


class UserPersistenceError(RepositoryError):
    """Raised when reading or writing user accounts fails."""


class DuplicateEmailError(UserPersistenceError):
    """Raised when an account with the same email already exists."""
