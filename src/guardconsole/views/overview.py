# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Project page: list of prior scans, newest first."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..core.index import SCAN_SUMMARY_COLUMNS
from ..core.polling import PollingController
from ..models.scan import ProjectOverview, ScanSummary
from .base import IndexedView


class ProjectOverviewView(IndexedView[ScanSummary]):
    def __init__(self, controller: PollingController[ProjectOverview], *, page_size: int = 10):
        super().__init__(
            controller,
            columns=SCAN_SUMMARY_COLUMNS,
            search_columns=("scan_id",),
            page_size=page_size,
            default_sort=("created", "desc"),
        )

    def _records_of(self, snapshot: ProjectOverview) -> Sequence[ScanSummary]:
        return snapshot.scans

    @property
    def in_progress(self) -> list[ScanSummary]:
        return [scan for scan in self._index.records if not scan.completed]

    def to_dict(self) -> dict[str, Any]:
        overview = self.controller.snapshot
        return {
            "project_slug": overview.project_slug if overview else None,
            "project_name": overview.project_name if overview else None,
            "stale": self.stale,
            "page": self.page_index,
            "page_count": self.page_count,
            "rows": self.rendered_rows(),
        }
