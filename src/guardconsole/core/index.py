# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
In-memory index over projected records.

The index holds already-normalized records and offers case-insensitive
substring search, a single-key stable sort and pagination. Search text is
lowered once at construction so filtering is a plain scan on every keystroke.
Sorting always starts from source order, so ties keep their source position
and re-sorting never depends on earlier sort calls.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from .display import format_resource_cost, scan_label, time_since

T = TypeVar("T")
SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class Column:
    """Table column: a sort key accessor plus a display renderer."""

    name: str
    value: Callable[[Any], Any]
    display: Callable[[Any], str] | None = None
    sortable: bool = True

    def render(self, record: Any) -> str:
        if self.display is not None:
            return self.display(record)
        value = self.value(record)
        return "" if value is None else str(value)


def _columns(*columns: Column) -> dict[str, Column]:
    return {column.name: column for column in columns}


SCAN_RECORD_COLUMNS: dict[str, Column] = _columns(
    Column("service", lambda r: r.service),
    Column("region", lambda r: r.region),
    Column("summary", lambda r: r.summary, sortable=False),
    Column("findings", lambda r: r.finding_count),
    Column("resource_cost", lambda r: r.resource_cost, lambda r: format_resource_cost(r.resource_cost)),
)

SCAN_SUMMARY_COLUMNS: dict[str, Column] = _columns(
    Column("scan_id", lambda s: s.scan_id, sortable=False),
    Column("scan", lambda s: s.created, lambda s: scan_label(s.created), sortable=False),
    Column("service_count", lambda s: s.service_count),
    Column("region_count", lambda s: s.region_count),
    Column("status", lambda s: s.completed, lambda s: "Completed" if s.completed else "In progress", sortable=False),
    Column("resource_cost", lambda s: s.resource_cost, lambda s: format_resource_cost(s.resource_cost)),
    Column("created", lambda s: s.created, lambda s: time_since(s.created)),
)

DEFAULT_SEARCH_COLUMNS = ("service", "region")


def _sort_key(column: Column) -> Callable[[Any], tuple[bool, Any]]:
    def key(record: Any) -> tuple[bool, Any]:
        value = column.value(record)
        return (value is None, value)

    return key


class ResultIndex(Generic[T]):
    """Search/sort/paginate view over an immutable sequence of records."""

    def __init__(
        self,
        records: Iterable[T],
        *,
        columns: Mapping[str, Column] = SCAN_RECORD_COLUMNS,
        search_columns: Sequence[str] = DEFAULT_SEARCH_COLUMNS,
    ):
        self._records: tuple[T, ...] = tuple(records)
        self._columns = dict(columns)
        self._search_columns: tuple[str, ...] = ()
        self._haystacks: list[tuple[str, ...]] = []
        self._order: list[int] = list(range(len(self._records)))
        self._sort: tuple[str, SortDirection] | None = None
        self._query = ""
        self._view: list[int] = list(self._order)
        self.set_search_columns(search_columns)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[T, ...]:
        return self._records

    @property
    def columns(self) -> dict[str, Column]:
        return dict(self._columns)

    @property
    def query(self) -> str:
        return self._query

    @property
    def sort_state(self) -> tuple[str, SortDirection] | None:
        return self._sort

    @property
    def search_columns(self) -> tuple[str, ...]:
        return self._search_columns

    @property
    def rows(self) -> list[T]:
        """Current filtered and sorted view."""
        return [self._records[i] for i in self._view]

    def _column(self, name: str) -> Column:
        try:
            return self._columns[name]
        except KeyError:
            raise ValueError(f"Unknown column: {name!r}") from None

    def set_search_columns(self, names: Sequence[str]) -> None:
        columns = [self._column(name) for name in names]
        if not columns:
            raise ValueError("At least one search column is required")
        self._search_columns = tuple(column.name for column in columns)
        self._haystacks = [tuple(column.render(record).lower() for column in columns) for record in self._records]
        self._apply_filter()

    def search(self, query: str | None) -> list[T]:
        self._query = query or ""
        self._apply_filter()
        return self.rows

    def sort_by(self, column: str, direction: SortDirection = "asc") -> None:
        if direction not in ("asc", "desc"):
            raise ValueError(f"Unknown sort direction: {direction!r}")
        col = self._column(column)
        if not col.sortable:
            raise ValueError(f"Column is not sortable: {column!r}")
        key = _sort_key(col)
        # sorted() is stable for reverse=True as well; ties keep source order.
        self._order = sorted(range(len(self._records)), key=lambda i: key(self._records[i]), reverse=direction == "desc")
        self._sort = (column, direction)
        self._apply_filter()

    def clear_sort(self) -> None:
        self._order = list(range(len(self._records)))
        self._sort = None
        self._apply_filter()

    def _apply_filter(self) -> None:
        needle = self._query.lower()
        if not needle:
            self._view = list(self._order)
            return
        self._view = [i for i in self._order if any(needle in text for text in self._haystacks[i])]

    def page_count(self, page_size: int) -> int:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        return math.ceil(len(self._view) / page_size)

    def paginate(self, page_index: int, page_size: int) -> list[T]:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if page_index < 0:
            return []
        start = page_index * page_size
        return [self._records[i] for i in self._view[start : start + page_size]]

    def can_previous(self, page_index: int) -> bool:
        return page_index > 0

    def can_next(self, page_index: int, page_size: int) -> bool:
        return page_index + 1 < self.page_count(page_size)

    def render(self, record: T) -> dict[str, str]:
        return {name: column.render(record) for name, column in self._columns.items()}

    def with_records(self, records: Iterable[T]) -> ResultIndex[T]:
        """Build a new index over `records`, carrying over search and sort state."""
        rebuilt: ResultIndex[T] = ResultIndex(records, columns=self._columns, search_columns=self._search_columns)
        if self._sort is not None:
            rebuilt.sort_by(*self._sort)
        if self._query:
            rebuilt.search(self._query)
        return rebuilt
