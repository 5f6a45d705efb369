"""
app/services/preference_service.py

Preference store for the dashboard's visible columns.

The user identity is passed explicitly into every call; there is no ambient
"current user". Reads follow a read-or-default contract: a user without a
stored record gets an empty list, which the dashboard resolves to its curated
default column set via ``resolve_visible_columns``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.user_settings_repository import UserSettingsRepository
from db.repositories.errors import PreferencePersistenceError

logger = logging.getLogger(__name__)

DEFAULT_VISIBLE_COLUMNS: tuple[str, ...] = (
    "Name",
    "Phone",
    "City",
    "Source",
    "Phone Status",
    "F2F Status",
    "Docs Status",
    "Job Status",
    "Level",
    "Submitted At",
)


def resolve_visible_columns(saved: Iterable[str], all_columns: Sequence[str]) -> list[str]:
    """
    Decide which columns to show for the current column universe.

    Saved columns that still exist win; otherwise the curated default set;
    otherwise every column. The result follows ``all_columns`` order.
    """

    saved_set = set(saved)
    chosen = [column for column in all_columns if column in saved_set]
    if chosen:
        return chosen
    defaults = [column for column in all_columns if column in DEFAULT_VISIBLE_COLUMNS]
    return defaults if defaults else list(all_columns)


class PreferenceService:
    """
    Reads and writes visible-column preferences through one session.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._repository = UserSettingsRepository(session)

    def get_visible_columns(self, user_id: str) -> list[str]:
        try:
            record = self._repository.get(user_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to read user settings user_id=%s", user_id)
            raise PreferencePersistenceError(f"Could not read settings for user {user_id}.") from exc

        if record is None:
            return []
        return list(record.visible_columns or [])

    def save_visible_columns(self, user_id: str, visible_columns: Sequence[str]) -> list[str]:
        """
        Upsert and commit the visible columns for ``user_id``.

        Duplicate names are dropped, keeping the first occurrence.
        """

        columns = list(dict.fromkeys(visible_columns))
        try:
            record = self._repository.upsert(user_id=user_id, visible_columns=columns)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.exception("Failed to persist user settings user_id=%s", user_id)
            raise PreferencePersistenceError(f"Could not save settings for user {user_id}.") from exc

        logger.info("User settings saved user_id=%s columns=%d", user_id, len(columns))
        return list(record.visible_columns)
