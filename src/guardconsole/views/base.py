# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared paging/sorting state for indexed views."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from ..core.index import Column, ResultIndex, SortDirection
from ..core.polling import PollingController

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IndexedView(Generic[T]):
    """
    Keeps a ResultIndex in sync with a controller's snapshots.

    The index is rebuilt only when the snapshot's record collection is a
    different object from the one last indexed; search and sort settings
    survive the rebuild.
    """

    def __init__(
        self,
        controller: PollingController,
        *,
        columns: Mapping[str, Column],
        search_columns: Sequence[str],
        page_size: int = 10,
        default_sort: tuple[str, SortDirection] | None = None,
    ):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.controller = controller
        self.page_size = page_size
        self.page_index = 0
        self.rebuild_count = 0
        self._source: Sequence[T] | None = None
        self._index: ResultIndex[T] = ResultIndex((), columns=columns, search_columns=search_columns)
        if default_sort is not None:
            self._index.sort_by(*default_sort)
        self._subscription = controller.subscribe(self._on_snapshot)
        if controller.snapshot is not None:
            self._on_snapshot(controller.snapshot)

    def _records_of(self, snapshot: Any) -> Sequence[T]:
        raise NotImplementedError

    def _on_snapshot(self, snapshot: Any) -> None:
        records = self._records_of(snapshot)
        if records is self._source:
            return
        self._source = records
        self._index = self._index.with_records(records)
        self.rebuild_count += 1
        logger.debug("Rebuilt %s index with %d records", type(self).__name__, len(self._index))
        self._clamp_page()

    def _clamp_page(self) -> None:
        last = max(0, self._index.page_count(self.page_size) - 1)
        self.page_index = min(self.page_index, last)

    @property
    def index(self) -> ResultIndex[T]:
        return self._index

    @property
    def loading(self) -> bool:
        """No snapshot has been received yet."""
        return self.controller.snapshot is None

    @property
    def stale(self) -> bool:
        return self.controller.stale

    @property
    def rows(self) -> list[T]:
        return self._index.paginate(self.page_index, self.page_size)

    def rendered_rows(self) -> list[dict[str, str]]:
        return [self._index.render(row) for row in self.rows]

    @property
    def page_count(self) -> int:
        return self._index.page_count(self.page_size)

    @property
    def can_previous(self) -> bool:
        return self._index.can_previous(self.page_index)

    @property
    def can_next(self) -> bool:
        return self._index.can_next(self.page_index, self.page_size)

    def next_page(self) -> None:
        if self.can_next:
            self.page_index += 1

    def previous_page(self) -> None:
        if self.can_previous:
            self.page_index -= 1

    def go_to_page(self, page_index: int) -> list[T]:
        self.page_index = page_index
        return self.rows

    def search(self, query: str | None) -> list[T]:
        self._index.search(query)
        self.page_index = 0
        return self.rows

    def sort_by(self, column: str, direction: SortDirection = "asc") -> None:
        self._index.sort_by(column, direction)
        self.page_index = 0

    def toggle_sort(self, column: str) -> SortDirection:
        """Header-click behavior: ascending first, then flip on each click."""
        current = self._index.sort_state
        direction: SortDirection = "desc" if current == (column, "asc") else "asc"
        self.sort_by(column, direction)
        return direction

    def close(self) -> None:
        self._subscription.unsubscribe()
