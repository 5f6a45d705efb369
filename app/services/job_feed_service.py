"""
app/services/job_feed_service.py

Feed gateway: validates a requested date window, fetches it from the job
feed, and returns curated applicant rows.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.config import get_job_feed_settings
from app.connectors import JobFeedConnector
from app.mappers.applicant_row_mapper import RowValue
from app.mappers.date_normalizer import normalize_request_date

logger = logging.getLogger(__name__)

INVALID_DATE_MESSAGE = "Missing or invalid startDate/endDate. Expected YYYY-MM-DD or YYYYMMDD."


class InvalidDateRangeError(ValueError):
    """
    Raised when a requested start or end date is missing or malformed.
    """

    def __init__(self, start_date: str | None, end_date: str | None) -> None:
        super().__init__(INVALID_DATE_MESSAGE)
        self.start_date = start_date
        self.end_date = end_date


class JobFeedService:
    """
    Coordinates date validation and the feed connector.

    ``start_date <= end_date`` is not checked; the window is forwarded to the
    feed as given.
    """

    def __init__(self, *, connector: JobFeedConnector) -> None:
        self._connector = connector

    def fetch_rows(self, start_date: str | None, end_date: str | None) -> list[dict[str, RowValue]]:
        """
        Return curated rows for ``[start_date, end_date]``.

        Raises ``InvalidDateRangeError`` before any network call when either
        date is malformed. Connector failures (``UpstreamError``,
        ``TransportError``) propagate to the caller unchanged.
        """

        start_compact = normalize_request_date(start_date)
        end_compact = normalize_request_date(end_date)
        if start_compact is None or end_compact is None:
            logger.info("Rejected job feed window start=%r end=%r", start_date, end_date)
            raise InvalidDateRangeError(start_date, end_date)

        return self._connector.fetch_rows(start_compact, end_compact)


@lru_cache(maxsize=1)
def get_job_feed_service() -> JobFeedService:
    """
    Build the job feed service from environment settings.
    """

    return JobFeedService(connector=JobFeedConnector(settings=get_job_feed_settings()))
