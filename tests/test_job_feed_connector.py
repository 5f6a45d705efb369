"""
tests/test_job_feed_connector.py

JobFeedConnector against a fake requests session: URL shape, payload
unwrapping and the mapping of HTTP failures onto connector errors.
"""

from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from app.config import JobFeedSettings
from app.connectors import JobFeedConnector, TransportError, UpstreamError, unwrap_feed_payload


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def request(self, **kwargs: Any) -> FakeResponse:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


SETTINGS = JobFeedSettings(base_url="https://feed.example.com/jobjson/key/", timeout_seconds=5.0)


def _connector(session: FakeSession) -> JobFeedConnector:
    return JobFeedConnector(settings=SETTINGS, session=session)  # type: ignore[arg-type]


class TestUnwrapFeedPayload:
    def test_bare_list(self) -> None:
        assert unwrap_feed_payload([{"name": "a"}]) == [{"name": "a"}]

    def test_data_envelope(self) -> None:
        assert unwrap_feed_payload({"data": [1, 2]}) == [1, 2]

    @pytest.mark.parametrize("payload", [None, {}, {"data": None}, {"data": {"x": 1}}, "text", 5])
    def test_other_shapes_are_empty(self, payload: Any) -> None:
        assert unwrap_feed_payload(payload) == []


class TestJobFeedConnector:
    def test_builds_path_url_and_forwards_timeout(self) -> None:
        session = FakeSession(FakeResponse(payload=[]))
        _connector(session).fetch_rows("20240301", "20240307")

        assert len(session.calls) == 1
        call = session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "https://feed.example.com/jobjson/key/20240301/20240307"
        assert call["timeout"] == 5.0

    def test_envelope_records_are_transformed(self, feed_record: dict[str, Any]) -> None:
        session = FakeSession(FakeResponse(payload={"data": [feed_record, feed_record]}))
        rows = _connector(session).fetch_rows("20240301", "20240307")

        assert len(rows) == 2
        assert rows[0]["Name"] == "Ayşe Yılmaz"
        assert rows[0]["Phone Date"] == "2024-03-12"
        assert "internal_notes" not in rows[0]

    def test_unexpected_shape_yields_no_rows(self) -> None:
        session = FakeSession(FakeResponse(payload={"status": "ok"}))
        assert _connector(session).fetch_rows("20240301", "20240307") == []

    def test_non_success_status_raises_upstream_error(self) -> None:
        session = FakeSession(FakeResponse(status_code=500, text="boom"))
        with pytest.raises(UpstreamError) as exc_info:
            _connector(session).fetch_rows("20240301", "20240307")

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "boom"

    def test_network_failure_raises_transport_error(self) -> None:
        session = FakeSession(error=requests.ConnectionError("connection refused"))
        with pytest.raises(TransportError, match="connection refused"):
            _connector(session).fetch_rows("20240301", "20240307")

    def test_invalid_json_raises_transport_error(self) -> None:
        session = FakeSession(FakeResponse(status_code=200, text="<html>"))
        with pytest.raises(TransportError):
            _connector(session).fetch_rows("20240301", "20240307")

    @pytest.mark.parametrize("status_code", [300, 304, 399])
    def test_redirect_statuses_raise_upstream_error(self, status_code: int) -> None:
        session = FakeSession(FakeResponse(status_code=status_code, payload=[]))
        with pytest.raises(UpstreamError) as exc_info:
            _connector(session).fetch_rows("20240301", "20240307")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.body == "[]"
