"""
app/mappers package marker.
"""

from app.mappers.applicant_row_mapper import CURATED_FIELDS, UPSTREAM_FIELD_BY_OUTPUT, transform_row
from app.mappers.date_normalizer import normalize_request_date, to_display_date, to_display_datetime

__all__ = [
    "CURATED_FIELDS",
    "UPSTREAM_FIELD_BY_OUTPUT",
    "normalize_request_date",
    "to_display_date",
    "to_display_datetime",
    "transform_row",
]
