# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Console API exports."""

from .client import AsyncConsoleApi, ConsoleApi
from .parse import parse_project, parse_scan, parse_start_scan, unwrap

__all__ = [
    "AsyncConsoleApi",
    "ConsoleApi",
    "parse_project",
    "parse_scan",
    "parse_start_scan",
    "unwrap",
]
