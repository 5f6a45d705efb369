"""
app/services/dashboard_state.py

Client-held row cache for the dashboard.

Each fetch is started with ``begin_fetch`` and gets a ticket. Only the ticket
of the most recently started fetch may adopt rows or report an error; late
answers for an older date range are dropped. A failed fetch records its
message but leaves the previously adopted rows in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    start_date: str
    end_date: str


@dataclass(frozen=True)
class FetchTicket:
    sequence: int
    date_range: DateRange


@dataclass
class DashboardState:
    rows: list[Mapping[str, Any]] = field(default_factory=list)
    date_range: DateRange | None = None
    requested_range: DateRange | None = None
    error: str | None = None
    loading: bool = False
    _latest_sequence: int = 0

    def begin_fetch(self, date_range: DateRange) -> FetchTicket:
        """
        Start a fetch for ``date_range``; every earlier ticket becomes stale.
        """

        self._latest_sequence += 1
        self.requested_range = date_range
        self.loading = True
        self.error = None
        return FetchTicket(sequence=self._latest_sequence, date_range=date_range)

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.sequence == self._latest_sequence

    def complete_fetch(self, ticket: FetchTicket, rows: Sequence[Mapping[str, Any]]) -> bool:
        """
        Adopt ``rows`` if ``ticket`` is still current. Returns whether it was.
        """

        if not self.is_current(ticket):
            logger.debug(
                "Ignoring stale fetch result sequence=%d latest=%d",
                ticket.sequence,
                self._latest_sequence,
            )
            return False
        self.rows = list(rows)
        self.date_range = ticket.date_range
        self.error = None
        self.loading = False
        return True

    def fail_fetch(self, ticket: FetchTicket, message: str) -> bool:
        """
        Record a failed fetch without discarding the rows already shown.
        """

        if not self.is_current(ticket):
            return False
        self.error = message
        self.loading = False
        return True

    @property
    def columns(self) -> list[str]:
        """
        Column universe, taken from the key order of the first row.
        """

        return list(self.rows[0].keys()) if self.rows else []

    def needs_fetch(self, date_range: DateRange) -> bool:
        """
        Whether ``date_range`` has not been attempted yet.

        A failed attempt counts as attempted; callers retry explicitly.
        """

        return self.requested_range != date_range
