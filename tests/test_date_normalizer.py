"""
tests/test_date_normalizer.py

Conversions between request dates, compact feed dates and display strings.
"""

from __future__ import annotations

import pytest

from app.mappers.date_normalizer import normalize_request_date, to_display_date, to_display_datetime


class TestNormalizeRequestDate:
    def test_dashed_date_is_compacted(self) -> None:
        assert normalize_request_date("2024-03-01") == "20240301"

    def test_compact_date_passes_through(self) -> None:
        assert normalize_request_date("20240301") == "20240301"

    @pytest.mark.parametrize(
        "value",
        [None, "", "2024-3-1", "2024/03/01", "240301", "2024-03-01 10:00", "abcdefgh", "2024-01-05\n", "20240105\n"],
    )
    def test_malformed_input_yields_none(self, value: str | None) -> None:
        assert normalize_request_date(value) is None


class TestToDisplayDate:
    def test_compact_string_is_dashed(self) -> None:
        assert to_display_date("20240312") == "2024-03-12"

    def test_integer_compact_value_is_accepted(self) -> None:
        assert to_display_date(20240312) == "2024-03-12"

    @pytest.mark.parametrize("value", [None, "", True, "2024-03-12", "2024031", "0", "20240105\n"])
    def test_non_compact_values_yield_none(self, value: object) -> None:
        assert to_display_date(value) is None

    def test_request_date_round_trips_through_display(self) -> None:
        for dashed in ("2024-01-31", "1999-12-01", "2030-06-15"):
            assert to_display_date(normalize_request_date(dashed)) == dashed


class TestToDisplayDatetime:
    def test_seconds_are_dropped(self) -> None:
        assert to_display_datetime("2024-03-10 14:25:09") == "2024-03-10 14:25"

    def test_short_time_is_kept(self) -> None:
        assert to_display_datetime("2024-03-10 9:05") == "2024-03-10 9:05"

    def test_date_without_time_is_returned_alone(self) -> None:
        assert to_display_datetime("2024-03-10") == "2024-03-10"

    @pytest.mark.parametrize("value", [None, "", False])
    def test_empty_values_yield_none(self, value: object) -> None:
        assert to_display_datetime(value) is None
