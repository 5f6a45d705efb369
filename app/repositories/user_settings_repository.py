"""
app/repositories/user_settings_repository.py

Persistence helpers for per-user dashboard settings.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from db.base import utcnow
from db.models.user_settings import UserSettings

_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class UserSettingsRepository:
    """
    Keyed record store for user settings; the key is the user identity.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str) -> UserSettings | None:
        stmt = select(UserSettings).where(UserSettings.user_id == user_id)
        return self._session.execute(stmt).scalars().first()

    def upsert(self, *, user_id: str, visible_columns: Sequence[str]) -> UserSettings:
        """
        Insert or replace the visible columns stored for ``user_id``.

        Runs as one INSERT ... ON CONFLICT (user_id) DO UPDATE; concurrent
        writers for the same user overwrite each other and the last
        statement wins.
        """

        dialect = self._session.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise RuntimeError(f"Unsupported database dialect for settings upsert: {dialect}")

        base = insert(UserSettings).values(user_id=user_id, visible_columns=list(visible_columns))
        stmt = base.on_conflict_do_update(
            index_elements=[UserSettings.user_id],
            set_={
                "visible_columns": base.excluded.visible_columns,
                "last_updated": utcnow(),
            },
        ).returning(UserSettings)
        return self._session.scalars(stmt, execution_options={"populate_existing": True}).one()
