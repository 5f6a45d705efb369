"""
app/mappers/date_normalizer.py

Conversions between the dashed dates used by the public API and the compact
8-digit dates used by the job feed.

Every function here is total: malformed input yields ``None`` and nothing is
raised. Callers treat ``None`` as "unknown", never as an error.
"""

from __future__ import annotations

import re
from typing import Any

DATE_DASHED = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_COMPACT = re.compile(r"^\d{8}$")


def normalize_request_date(value: str | None) -> str | None:
    """
    Convert a request date (``YYYY-MM-DD`` or ``YYYYMMDD``) to ``YYYYMMDD``.

    Returns ``None`` for empty input or any other shape (e.g. ``2024-1-5``).
    """

    if not value or not isinstance(value, str):
        return None
    if DATE_DASHED.fullmatch(value):
        return value.replace("-", "")
    if DATE_COMPACT.fullmatch(value):
        return value
    return None


def to_display_date(value: Any) -> str | None:
    """
    Format a compact ``YYYYMMDD`` value as ``YYYY-MM-DD``.

    Dashed strings are rejected; only the compact shape is accepted.
    """

    if value is None or value == "" or isinstance(value, bool):
        return None
    text = str(value)
    if not DATE_COMPACT.fullmatch(text):
        return None
    return f"{text[0:4]}-{text[4:6]}-{text[6:8]}"


def to_display_datetime(value: Any) -> str | None:
    """
    Trim a feed timestamp such as ``2024-03-10 14:25:09`` to ``2024-03-10 14:25``.

    A value without a time part is returned as the date alone.
    """

    if value is None or value == "" or isinstance(value, bool):
        return None
    date_part, _, rest = str(value).partition(" ")
    time_part = rest.split(" ", 1)[0][:5]
    return f"{date_part} {time_part}" if time_part else date_part
