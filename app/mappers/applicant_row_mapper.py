"""
app/mappers/applicant_row_mapper.py

Maps one raw job-feed record onto the curated applicant row shown by the
dashboard.

Only the fields listed in ``CURATED_FIELDS`` survive the mapping; every other
upstream key is dropped. The output key order is fixed because the dashboard
derives its column list from the keys of the first row.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from app.mappers.date_normalizer import to_display_date, to_display_datetime

logger = logging.getLogger(__name__)

RowValue = str | int | float | None

# (output field, upstream key, converter)
_FIELD_TABLE: tuple[tuple[str, str, Callable[[Any], RowValue] | None], ...] = (
    ("Name", "name", None),
    ("Phone", "phone", None),
    ("Email", "email", None),
    ("City", "city_name", None),
    ("District", "semt", None),
    ("Source", "source_name", None),
    ("Phone Status", "phonestatuename", None),
    ("Phone Date", "phone_date", to_display_date),
    ("F2F Status", "facetofacestatuename", None),
    ("F2F Date", "facetoface_date", to_display_date),
    ("Docs Status", "documentstatuename", None),
    ("Docs Date", "document_date", to_display_date),
    ("Job Status", "jobstatuename", None),
    ("Job Date", "job_statue_date", to_display_date),
    ("Job Exit", "job_exit_date", to_display_date),
    ("Level", "level_name", None),
    ("Dealer", "dealer_name", None),
    ("Submitted At", "realdate", to_display_datetime),
    ("Views", "totalview", None),
    ("Form URL", "actual_link", None),
)

CURATED_FIELDS: tuple[str, ...] = tuple(entry[0] for entry in _FIELD_TABLE)

UPSTREAM_FIELD_BY_OUTPUT: dict[str, str] = {output: source for output, source, _ in _FIELD_TABLE}


def _scalar(value: Any) -> RowValue:
    # bool subclasses int; booleans degrade to None as well
    if isinstance(value, bool):
        return None
    if value is None or isinstance(value, (str, int, float)):
        return value
    return None


def transform_row(record: Any) -> dict[str, RowValue]:
    """
    Build a curated applicant row from one upstream record.

    Never raises: a record that is not a mapping is treated as empty, and
    fields with unusable values degrade to ``None``.
    """

    source: Mapping[str, Any] = record if isinstance(record, Mapping) else {}
    if not isinstance(record, Mapping) and record is not None:
        logger.debug("Non-mapping feed record coerced to empty row type=%s", type(record).__name__)

    row: dict[str, RowValue] = {}
    for output_field, upstream_key, converter in _FIELD_TABLE:
        raw = source.get(upstream_key)
        if converter is not None:
            row[output_field] = converter(_scalar(raw))
        else:
            row[output_field] = _scalar(raw)
    return row
