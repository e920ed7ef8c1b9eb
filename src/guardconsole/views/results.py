# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan detail page: findings table plus per-record drill-down."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..core.display import status_text
from ..core.drilldown import DisplayDetail, detail
from ..core.index import DEFAULT_SEARCH_COLUMNS, SCAN_RECORD_COLUMNS
from ..core.polling import PollingController
from ..models.scan import ScanRecord, ScanSnapshot
from .base import IndexedView


class ScanResultsView(IndexedView[ScanRecord]):
    def __init__(
        self,
        controller: PollingController[ScanSnapshot],
        *,
        page_size: int = 10,
        search_columns: Sequence[str] = DEFAULT_SEARCH_COLUMNS,
    ):
        super().__init__(
            controller,
            columns=SCAN_RECORD_COLUMNS,
            search_columns=search_columns,
            page_size=page_size,
        )

    def _records_of(self, snapshot: ScanSnapshot) -> Sequence[ScanRecord]:
        return snapshot.items

    @property
    def snapshot(self) -> ScanSnapshot | None:
        return self.controller.snapshot

    @property
    def completed(self) -> bool:
        snapshot = self.snapshot
        return bool(snapshot and snapshot.completed)

    @property
    def status_text(self) -> str:
        return status_text(self.completed)

    def detail(self, row: int) -> DisplayDetail:
        """Drill into the `row`-th record of the current page."""
        rows = self.rows
        if not 0 <= row < len(rows):
            raise IndexError(f"No row {row} on page {self.page_index}")
        return detail(rows[row])

    def to_dict(self) -> dict[str, Any]:
        snapshot = self.snapshot
        return {
            "scan_id": snapshot.scan_id if snapshot else None,
            "status": self.status_text,
            "stale": self.stale,
            "service_count": snapshot.service_count if snapshot else 0,
            "region_count": snapshot.region_count if snapshot else 0,
            "resource_cost": snapshot.resource_cost if snapshot else 0,
            "page": self.page_index,
            "page_count": self.page_count,
            "rows": self.rendered_rows(),
        }
