# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Read-only table/detail views fed by polling controllers."""

from .overview import ProjectOverviewView
from .results import ScanResultsView

__all__ = ["ProjectOverviewView", "ScanResultsView"]
