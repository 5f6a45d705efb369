"""
Repository layer exports.
"""

from db.repositories.errors import (
    DuplicateEmailError,
    PreferencePersistenceError,
    RepositoryError,
    UserPersistenceError,
)

__all__ = [
    "DuplicateEmailError",
    "PreferencePersistenceError",
    "RepositoryError",
    "UserPersistenceError",
]
