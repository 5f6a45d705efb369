"""
tests/test_metrics_service.py

Pytest unit tests for MetricsService.

All tests are pure Python: no database, no I/O. The reference date is
always passed explicitly so results do not depend on the clock.

Coverage
--------
- Totals and breakdown ordering
- Breakdown field selection
- Filtered metrics
- Interview KPIs and zero-row guards
- Interview summary by day, ISO week, month and year
- Period share
"""

from __future__ import annotations

from datetime import date

import pytest

from app.services.metrics_service import (
    BreakdownEntry,
    MetricsService,
    parse_row_date,
    percent_of,
    same_period,
)

SCHEDULED = "Görüşme Ayarlandı"


@pytest.fixture()
def svc() -> MetricsService:
    return MetricsService(interview_status=SCHEDULED)


def _row(**values: object) -> dict[str, object]:
    base: dict[str, object] = {
        "Name": "x",
        "City": None,
        "Phone Status": None,
        "Phone Date": None,
        "Job Status": None,
        "Submitted At": None,
    }
    base.update(values)
    return base


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_percent_of_guards_zero(self) -> None:
        assert percent_of(3, 0) == 0.0
        assert percent_of(1, 4) == 25.0

    def test_parse_row_date(self) -> None:
        assert parse_row_date("2024-03-12") == date(2024, 3, 12)
        assert parse_row_date("2024-03-12 09:30") == date(2024, 3, 12)
        assert parse_row_date("20240312") is None
        assert parse_row_date(None) is None
        assert parse_row_date("2024-W11-3") is None
        assert parse_row_date("2024-072") is None
        assert parse_row_date("2024-03-12\n") is None

    def test_iso_week_spans_year_boundary(self) -> None:
        # 2024-12-30 (Mon) and 2025-01-05 (Sun) share ISO week 2025-W01.
        assert same_period(date(2024, 12, 30), date(2025, 1, 5), "week")
        assert not same_period(date(2024, 12, 29), date(2024, 12, 30), "week")

    def test_unknown_period_raises(self) -> None:
        with pytest.raises(ValueError):
            same_period(date(2024, 1, 1), date(2024, 1, 1), "decade")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Breakdown
# ---------------------------------------------------------------------------


class TestBreakdown:
    def test_empty_rows(self, svc: MetricsService) -> None:
        assert svc.compute_totals([]) == 0
        assert svc.compute_breakdown([], "City") == []

    def test_counts_sum_to_total(self, svc: MetricsService) -> None:
        rows = [_row(City=c) for c in ("Ankara", "İzmir", "Ankara", None, "Bursa")]
        entries = svc.compute_breakdown(rows, "City")
        assert sum(entry.count for entry in entries) == len(rows)

    def test_sorted_descending_with_first_seen_tie_break(self, svc: MetricsService) -> None:
        rows = [_row(City=c) for c in ("İzmir", "Ankara", "Bursa", "Ankara")]
        entries = svc.compute_breakdown(rows, "City", top_n=3)
        assert entries == [
            BreakdownEntry("Ankara", 2, 50.0),
            BreakdownEntry("İzmir", 1, 25.0),
            BreakdownEntry("Bursa", 1, 25.0),
        ]

    def test_top_n_truncates(self, svc: MetricsService) -> None:
        rows = [_row(City=c) for c in ("a", "b", "c", "d")]
        assert len(svc.compute_breakdown(rows, "City", top_n=2)) == 2

    def test_null_counted_as_sentinel(self, svc: MetricsService) -> None:
        entries = svc.compute_breakdown([_row(), _row()], "City")
        assert entries == [BreakdownEntry("N/A", 2, 100.0)]


class TestSelectBreakdownField:
    def test_priority_field_wins(self, svc: MetricsService) -> None:
        rows = [_row(City="Ankara", **{"Job Status": "Beklemede", "Phone Status": "Ulaşılamadı"})]
        assert svc.select_breakdown_field(rows) == "Job Status"

    def test_null_priority_fields_are_skipped(self, svc: MetricsService) -> None:
        rows = [_row(City="Ankara")]
        assert svc.select_breakdown_field(rows) == "City"

    def test_falls_back_to_first_string_field(self, svc: MetricsService) -> None:
        assert svc.select_breakdown_field([{"Views": 3, "Note": "hi"}]) == "Note"

    def test_no_string_fields(self, svc: MetricsService) -> None:
        assert svc.select_breakdown_field([{"Views": 3}]) is None
        assert svc.select_breakdown_field([]) is None


class TestComputeMetrics:
    def test_filters_before_counting(self, svc: MetricsService) -> None:
        rows = [
            _row(City="Ankara", **{"Job Status": "Beklemede"}),
            _row(City="Ankara", **{"Job Status": "İşe Alındı"}),
            _row(City="Bursa", **{"Job Status": "Beklemede"}),
        ]
        metrics = svc.compute_metrics(rows, {"City": {"Ankara"}})

        assert metrics.total == 2
        assert metrics.breakdown_field == "Job Status"
        assert [entry.value for entry in metrics.breakdown] == ["Beklemede", "İşe Alındı"]

    def test_empty_filter_result_uses_unfiltered_field(self, svc: MetricsService) -> None:
        rows = [_row(City="Ankara")]
        metrics = svc.compute_metrics(rows, {"City": {"Bursa"}})
        assert metrics.total == 0
        assert metrics.breakdown_field == "City"
        assert metrics.breakdown == []

    def test_no_rows(self, svc: MetricsService) -> None:
        metrics = svc.compute_metrics([])
        assert metrics.total == 0
        assert metrics.breakdown_field is None


# ---------------------------------------------------------------------------
# Interview cards
# ---------------------------------------------------------------------------


class TestInterviewMetrics:
    def test_application_kpis(self, svc: MetricsService) -> None:
        rows = [_row(**{"Phone Status": SCHEDULED}), _row(), _row(), _row(**{"Phone Status": "Ulaşılamadı"})]
        kpis = svc.compute_application_kpis(rows)
        assert kpis.total_applications == 4
        assert kpis.interview_scheduled_count == 1
        assert kpis.interview_scheduled_percent == 25.0

    def test_application_kpis_zero_rows(self, svc: MetricsService) -> None:
        kpis = svc.compute_application_kpis([])
        assert kpis.interview_scheduled_percent == 0.0

    def test_interview_summary_periods(self, svc: MetricsService) -> None:
        today = date(2024, 3, 13)  # Wednesday
        rows = [
            _row(Name="today", **{"Phone Status": SCHEDULED, "Phone Date": "2024-03-13"}),
            _row(Name="monday", **{"Phone Status": SCHEDULED, "Phone Date": "2024-03-11"}),
            _row(Name="earlier", **{"Phone Status": SCHEDULED, "Phone Date": "2024-03-01"}),
            _row(Name="january", **{"Phone Status": SCHEDULED, "Phone Date": "2024-01-20"}),
            _row(Name="last year", **{"Phone Status": SCHEDULED, "Phone Date": "2023-03-13"}),
            _row(Name="no date", **{"Phone Status": SCHEDULED}),
            _row(Name="other status", **{"Phone Status": "Ulaşılamadı", "Phone Date": "2024-03-13"}),
        ]

        summary = svc.compute_interview_summary(rows, today=today)

        assert [row["Name"] for row in summary.today_rows] == ["today"]
        assert summary.week_count == 2
        assert summary.month_count == 3
        assert summary.year_count == 4

    def test_period_share(self, svc: MetricsService) -> None:
        today = date(2024, 3, 13)
        rows = [
            _row(**{"Submitted At": "2024-03-02 10:00", "Phone Status": SCHEDULED, "Phone Date": "2024-03-05"}),
            _row(**{"Submitted At": "2024-03-03 11:00"}),
            _row(**{"Submitted At": "2024-03-04 12:00"}),
            _row(**{"Submitted At": "2024-03-09 12:00"}),
            _row(**{"Submitted At": "2024-02-28 09:00", "Phone Status": SCHEDULED, "Phone Date": "2024-02-29"}),
        ]
        assert svc.compute_period_share(rows, "month", today=today) == 25.0
        assert svc.compute_period_share(rows, "year", today=today) == 40.0

    def test_period_share_without_submissions(self, svc: MetricsService) -> None:
        rows = [_row(**{"Phone Status": SCHEDULED, "Phone Date": "2024-03-05"})]
        assert svc.compute_period_share(rows, "month", today=date(2024, 3, 13)) == 0.0
