# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for GuardConsole."""

from ..http.models import Headers, HttpRequest, HttpResponse, RetryConfig
from .scan import ProjectOverview, ScanRecord, ScanSnapshot, ScanSubEntry, ScanSummary

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProjectOverview",
    "RetryConfig",
    "ScanRecord",
    "ScanSnapshot",
    "ScanSubEntry",
    "ScanSummary",
]
