# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan result synchronization and presentation engine."""

from .drilldown import DisplayDetail, EntryDetail, detail
from .index import SCAN_RECORD_COLUMNS, SCAN_SUMMARY_COLUMNS, Column, ResultIndex
from .normalize import normalize
from .polling import AsyncioScheduler, PollingController, PollingState, Scheduler, Subscription
from .projection import project, project_all, project_entry

__all__ = [
    "AsyncioScheduler",
    "Column",
    "DisplayDetail",
    "EntryDetail",
    "PollingController",
    "PollingState",
    "ResultIndex",
    "SCAN_RECORD_COLUMNS",
    "SCAN_SUMMARY_COLUMNS",
    "Scheduler",
    "Subscription",
    "detail",
    "normalize",
    "project",
    "project_all",
    "project_entry",
]
