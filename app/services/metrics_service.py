"""
app/services/metrics_service.py

Deterministic summary metrics over curated applicant rows.

Everything here is pure arithmetic over rows already held by the caller; no
I/O is performed.

Formulas
--------
Total             = number of rows
Breakdown share   = 100 * count(value) / number of rows
Interview share   = 100 * scheduled rows / number of rows
Period share      = 100 * scheduled in period (by Phone Date)
                    / submissions in period (by Submitted At)

Every division guards the zero-denominator case and yields ``0.0``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Final, Literal, Mapping, Sequence

from app.config import DEFAULT_INTERVIEW_STATUS
from app.mappers.date_normalizer import DATE_DASHED
from app.services.filter_service import FilterState, filter_rows, stringify_value

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
Period = Literal["day", "week", "month", "year"]

BREAKDOWN_PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "Job Status",
    "Phone Status",
    "Source",
    "City",
    "Dealer",
    "Level",
)

PHONE_STATUS_FIELD: Final[str] = "Phone Status"
PHONE_DATE_FIELD: Final[str] = "Phone Date"
SUBMITTED_AT_FIELD: Final[str] = "Submitted At"


def percent_of(part: float, whole: float) -> float:
    """
    Return ``100 * part / whole``, or ``0.0`` when ``whole`` is zero.
    """

    if not whole:
        return 0.0
    return 100.0 * part / whole


def parse_row_date(value: Any) -> date | None:
    """
    Parse the date part of a ``YYYY-MM-DD`` or ``YYYY-MM-DD HH:mm`` cell.
    """

    if not isinstance(value, str) or not value:
        return None
    date_part = value.split(" ", 1)[0]
    if not DATE_DASHED.fullmatch(date_part):
        return None
    try:
        return date.fromisoformat(date_part)
    except ValueError:
        return None


def same_period(value: date, reference: date, period: Period) -> bool:
    if period == "day":
        return value == reference
    if period == "week":
        # ISO weeks start on Monday
        return value.isocalendar()[:2] == reference.isocalendar()[:2]
    if period == "month":
        return (value.year, value.month) == (reference.year, reference.month)
    if period == "year":
        return value.year == reference.year
    raise ValueError(f"Unknown period: {period!r}")


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BreakdownEntry:
    value: str
    count: int
    percent: float


@dataclass(frozen=True)
class Metrics:
    """
    Total row count plus an optional top-N breakdown over one field.
    """

    total: int
    breakdown_field: str | None = None
    breakdown: list[BreakdownEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ApplicationKPIs:
    total_applications: int
    interview_scheduled_count: int
    interview_scheduled_percent: float


@dataclass(frozen=True)
class InterviewSummary:
    """
    Scheduled-interview counts relative to ``reference_date``.
    """

    reference_date: date
    today_rows: list[Row]
    week_count: int
    month_count: int
    year_count: int


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class MetricsService:
    """
    Stateless metrics engine used by the dashboard cards.

    Usage::

        service = MetricsService()
        metrics = service.compute_metrics(rows, {"City": {"Ankara"}})
        print(metrics.total, metrics.breakdown)
    """

    def __init__(self, *, interview_status: str = DEFAULT_INTERVIEW_STATUS) -> None:
        self._interview_status = interview_status

    def compute_totals(self, rows: Sequence[Row]) -> int:
        return len(rows)

    def compute_breakdown(
        self,
        rows: Sequence[Row],
        field_name: str,
        top_n: int | None = None,
    ) -> list[BreakdownEntry]:
        """
        Count rows per stringified value of ``field_name``.

        Missing and null values are counted under ``"N/A"``. Entries are
        sorted by descending count with a stable sort, so tied values keep
        the order in which they were first encountered. ``top_n=None`` keeps
        every value.
        """

        counts: dict[str, int] = {}
        for row in rows:
            key = stringify_value(row.get(field_name))
            counts[key] = counts.get(key, 0) + 1

        ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        if top_n is not None:
            ordered = ordered[: max(0, top_n)]

        total = len(rows)
        return [
            BreakdownEntry(value=value, count=count, percent=percent_of(count, total))
            for value, count in ordered
        ]

    def select_breakdown_field(self, rows: Sequence[Row]) -> str | None:
        """
        Choose the field to break metrics down by.

        The first priority field present with a string value in the first
        row wins; otherwise the first string-valued field of that row.
        """

        if not rows:
            return None
        first = rows[0]
        for candidate in BREAKDOWN_PRIORITY_FIELDS:
            if candidate in first and isinstance(first[candidate], str):
                return candidate
        for key, value in first.items():
            if isinstance(value, str):
                return key
        return None

    def compute_metrics(
        self,
        rows: Sequence[Row],
        filter_state: FilterState | None = None,
        *,
        top_n: int | None = 3,
        field_name: str | None = None,
    ) -> Metrics:
        """
        Filter ``rows`` and summarise the result.

        When ``field_name`` is not given the breakdown field is chosen from
        the first filtered row, falling back to the first unfiltered row.
        """

        filtered = filter_rows(rows, filter_state or {})
        total = self.compute_totals(filtered)

        chosen = field_name
        if chosen is None:
            chosen = self.select_breakdown_field(filtered) or self.select_breakdown_field(rows)
        if chosen is None:
            return Metrics(total=total)

        breakdown = self.compute_breakdown(filtered, chosen, top_n)
        logger.debug("Metrics computed total=%d field=%s values=%d", total, chosen, len(breakdown))
        return Metrics(total=total, breakdown_field=chosen, breakdown=breakdown)

    # ------------------------------------------------------------------
    # Interview cards
    # ------------------------------------------------------------------

    def is_interview_scheduled(self, row: Row) -> bool:
        value = row.get(PHONE_STATUS_FIELD)
        return value is not None and str(value) == self._interview_status

    def compute_application_kpis(self, rows: Sequence[Row]) -> ApplicationKPIs:
        """
        Total applications and the share with a scheduled interview.
        """

        total = len(rows)
        scheduled = sum(1 for row in rows if self.is_interview_scheduled(row))
        return ApplicationKPIs(
            total_applications=total,
            interview_scheduled_count=scheduled,
            interview_scheduled_percent=percent_of(scheduled, total),
        )

    def compute_interview_summary(
        self,
        rows: Sequence[Row],
        today: date | None = None,
    ) -> InterviewSummary:
        """
        Scheduled interviews today (as rows) and this week, month and year.

        Rows are matched on ``Phone Date``; rows without a parseable date are
        skipped.
        """

        reference = today or datetime.now().date()
        today_rows: list[Row] = []
        week_count = month_count = year_count = 0

        for row in rows:
            if not self.is_interview_scheduled(row):
                continue
            phone_date = parse_row_date(row.get(PHONE_DATE_FIELD))
            if phone_date is None:
                continue
            if same_period(phone_date, reference, "day"):
                today_rows.append(row)
            if same_period(phone_date, reference, "week"):
                week_count += 1
            if same_period(phone_date, reference, "month"):
                month_count += 1
            if same_period(phone_date, reference, "year"):
                year_count += 1

        return InterviewSummary(
            reference_date=reference,
            today_rows=today_rows,
            week_count=week_count,
            month_count=month_count,
            year_count=year_count,
        )

    def compute_period_share(
        self,
        rows: Sequence[Row],
        period: Period,
        today: date | None = None,
    ) -> float:
        """
        Scheduled interviews in ``period`` as a percentage of submissions in it.

        The numerator counts scheduled rows by ``Phone Date``; the denominator
        counts every row by ``Submitted At`` regardless of status. The two
        counts are independent, so the share can exceed 100.
        """

        reference = today or datetime.now().date()
        scheduled = 0
        submitted = 0
        for row in rows:
            submitted_on = parse_row_date(row.get(SUBMITTED_AT_FIELD))
            if submitted_on is not None and same_period(submitted_on, reference, period):
                submitted += 1
            if not self.is_interview_scheduled(row):
                continue
            phone_date = parse_row_date(row.get(PHONE_DATE_FIELD))
            if phone_date is not None and same_period(phone_date, reference, period):
                scheduled += 1
        return percent_of(scheduled, submitted)
