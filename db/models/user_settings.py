"""
db/models/user_settings.py

Per-user dashboard preferences, one row per user identity.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, PortableJSON, utcnow


class UserSettings(Base):
    """
    Visible dashboard columns chosen by one user.

    user_id is the authenticated identity (token subject), kept as a string
    so the table does not depend on how identities are issued. Writes are
    last-write-wins; there is no version column.
    """

    __tablename__ = "user_settings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Authenticated user identity (token subject)",
    )
    visible_columns: Mapped[list[str]] = mapped_column(
        PortableJSON,
        nullable=False,
        default=list,
        comment="Ordered list of visible dashboard column names",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    __table_args__ = (UniqueConstraint("user_id", name="uq_user_settings_user_id"),)

    def __repr__(self) -> str:
        return f"<UserSettings user_id={self.user_id!r} columns={len(self.visible_columns or [])}>"
