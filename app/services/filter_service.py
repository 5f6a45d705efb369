"""
app/services/filter_service.py

Row filtering, filter-chip options and pagination over curated applicant rows.

Filter state maps a field name to its allow-set. An empty allow-set means
"no constraint", exactly like a field that is absent from the state: clearing
the last chip of a field shows every row again.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any

NULL_SENTINEL = "N/A"

Row = Mapping[str, Any]
FilterState = Mapping[str, Set[str]]


def stringify_value(value: Any) -> str:
    """
    Coerce a row value to the string compared against allow-sets.
    """

    if value is None:
        return NULL_SENTINEL
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def filter_rows(rows: Sequence[Row], filter_state: FilterState) -> Sequence[Row]:
    """
    Return the rows that satisfy every non-empty allow-set in ``filter_state``.

    ``rows`` itself is returned (no copy) when it is empty or when the filter
    state has no fields at all.
    """

    if not rows or not filter_state:
        return rows

    active: list[tuple[str, Set[str]]] = []
    for field_name, allowed in filter_state.items():
        if allowed is None:
            continue
        if len(allowed) == 0:
            continue
        active.append((field_name, allowed))

    return [
        row
        for row in rows
        if all(stringify_value(row.get(field_name)) in allowed for field_name, allowed in active)
    ]


def toggle_filter_value(filter_state: FilterState, field_name: str, value: str) -> dict[str, set[str]]:
    """
    Return a new filter state with ``value`` toggled in ``field_name``'s allow-set.
    """

    updated = {key: set(values) for key, values in filter_state.items()}
    allowed = updated.setdefault(field_name, set())
    if value in allowed:
        allowed.remove(value)
    else:
        allowed.add(value)
    return updated


@dataclass(frozen=True)
class FilterOption:
    value: str
    count: int


def filter_candidate_fields(rows: Sequence[Row], keys: Iterable[str] | None = None) -> list[str]:
    """
    Pick the fields that can be offered as filter chips.

    With explicit ``keys``, those whose first-row value is a string or null;
    otherwise every string-valued field of the first row.
    """

    if not rows:
        return []
    first = rows[0]
    explicit = list(keys) if keys is not None else []
    if explicit:
        return [key for key in explicit if isinstance(first.get(key), str) or first.get(key) is None]
    return [key for key, value in first.items() if isinstance(value, str)]


def build_filter_options(
    rows: Sequence[Row],
    keys: Iterable[str] | None = None,
) -> dict[str, list[FilterOption]]:
    """
    Count the distinct stringified values of every candidate field.

    Options are ordered by descending count; ties keep first-seen order.
    """

    candidates = filter_candidate_fields(rows, keys)
    counts: dict[str, dict[str, int]] = {key: {} for key in candidates}
    for row in rows:
        for key in candidates:
            value = stringify_value(row.get(key))
            bucket = counts[key]
            bucket[value] = bucket.get(value, 0) + 1

    return {
        key: [
            FilterOption(value=value, count=count)
            for value, count in sorted(bucket.items(), key=lambda item: item[1], reverse=True)
        ]
        for key, bucket in counts.items()
    }


@dataclass(frozen=True)
class Page:
    items: list[Row]
    page: int
    page_size: int
    total_rows: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate_rows(rows: Sequence[Row], page: int, page_size: int) -> Page:
    """
    Slice one 1-based page out of ``rows``, clamping ``page`` into range.
    """

    size = max(1, int(page_size))
    total_rows = len(rows)
    total_pages = max(1, math.ceil(total_rows / size))
    current = min(max(1, int(page)), total_pages)
    start = (current - 1) * size
    return Page(
        items=list(rows[start : start + size]),
        page=current,
        page_size=size,
        total_rows=total_rows,
        total_pages=total_pages,
    )
