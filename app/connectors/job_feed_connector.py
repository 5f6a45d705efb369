"""
app/connectors/job_feed_connector.py

Connector for the external job-applications feed.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from app.config import JobFeedSettings
from app.connectors.base import BaseConnector
from app.mappers.applicant_row_mapper import RowValue, transform_row

logger = logging.getLogger(__name__)


def unwrap_feed_payload(payload: Any) -> list[Any]:
    """
    Resolve the record list from a feed payload.

    The feed answers with either a bare JSON array or an object holding the
    array under ``data``. Any other shape resolves to an empty list.
    """

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return data
    return []


class JobFeedConnector(BaseConnector):
    """
    Fetches one date window of applications and maps them to curated rows.
    """

    def __init__(
        self,
        *,
        settings: JobFeedSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="job_feed", settings=settings, session=session)
        self._base_url = settings.base_url.rstrip("/")

    def build_url(self, start_compact: str, end_compact: str) -> str:
        return f"{self._base_url}/{start_compact}/{end_compact}"

    def fetch_rows(self, start_compact: str, end_compact: str) -> list[dict[str, RowValue]]:
        """
        Fetch ``base/start/end`` and transform every element of the payload.

        Both dates must already be in compact ``YYYYMMDD`` form.
        """

        payload = self._request_json(method="GET", url=self.build_url(start_compact, end_compact))
        records = unwrap_feed_payload(payload)
        if not isinstance(payload, list) and not (
            isinstance(payload, dict) and isinstance(payload.get("data"), list)
        ):
            logger.warning(
                "Feed payload had no record array source=%s payload_type=%s",
                self.source,
                type(payload).__name__,
            )

        rows = [transform_row(record) for record in records]
        logger.info(
            "Feed rows fetched source=%s start=%s end=%s rows=%d",
            self.source,
            start_compact,
            end_compact,
            len(rows),
        )
        return rows
