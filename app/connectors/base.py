"""
app/connectors/base.py

Base connector abstraction and shared HTTP mechanics.

Requests are one-shot: there is no retry loop. A failed call surfaces as
``UpstreamError`` (non-2xx answer) or ``TransportError`` (the answer never
arrived or could not be read) and the caller decides what to do with it.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from app.config import JobFeedSettings

logger = logging.getLogger(__name__)


class FeedGatewayError(RuntimeError):
    """
    Base class for failures talking to an upstream feed.
    """


class UpstreamError(FeedGatewayError):
    """
    Raised when the upstream answers with any status outside 2xx.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Upstream responded with HTTP {status_code}.")
        self.status_code = status_code
        self.body = body


class TransportError(FeedGatewayError):
    """
    Raised when the upstream cannot be reached or its payload cannot be read.
    """


class BaseConnector:
    """
    Shared plumbing for connectors that read JSON from an HTTP feed.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        settings: JobFeedSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._session = session or requests.Session()
        self._timeout_seconds = settings.timeout_seconds

    def _request_json(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Execute an HTTP request and return parsed JSON.
        """

        response = self._request(method=method, url=url, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Connector response was not JSON source=%s url=%s", self.source, url)
            raise TransportError(f"{self.source}: response was not valid JSON.") from exc

    def _request(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Execute one HTTP request and map failures onto connector errors.
        """

        try:
            response = self._session.request(
                method=method,
                url=url,
                params=params,
                headers=headers,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error(
                "Connector request failed source=%s url=%s error=%s",
                self.source,
                url,
                exc,
            )
            raise TransportError(str(exc) or f"{self.source}: request failed.") from exc

        if not 200 <= response.status_code < 300:
            body = response.text
            logger.error(
                "Connector upstream error source=%s status=%s url=%s",
                self.source,
                response.status_code,
                url,
            )
            raise UpstreamError(response.status_code, body)

        return response
