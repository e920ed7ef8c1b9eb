# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GuardConsole package entrypoint.

This package is the client side of a cloud security scanning console: it
polls the console API for scan progress, settles once a scan completes, and
turns the raw findings payload into normalized records that can be searched,
sorted, paged and drilled into. HTTP behavior is abstracted behind injectable
client interfaces, and domain objects are modeled with typed dataclasses.
"""

from .api import AsyncConsoleApi, ConsoleApi
from .catalog import AWS_REGIONS, AWS_SERVICES, validate_selection
from .config import ConsoleSettings, load_settings
from .core import (
    DisplayDetail,
    PollingController,
    PollingState,
    ResultIndex,
    detail,
    normalize,
    project,
)
from .errors import ApiError, GuardConsoleError, NotFoundError, SelectionError
from .http import (
    AsyncHttpxClient,
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    RetryConfig,
    create_default_http_client,
)
from .log import setup_logging
from .models import ProjectOverview, ScanRecord, ScanSnapshot, ScanSubEntry, ScanSummary
from .runtime import GuardConsole
from .version import __version__
from .views import ProjectOverviewView, ScanResultsView

__all__ = [
    "AWS_REGIONS",
    "AWS_SERVICES",
    "ApiError",
    "AsyncConsoleApi",
    "AsyncHttpxClient",
    "ConsoleApi",
    "ConsoleSettings",
    "DisplayDetail",
    "GuardConsole",
    "GuardConsoleError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "NotFoundError",
    "PollingController",
    "PollingState",
    "ProjectOverview",
    "ProjectOverviewView",
    "ResultIndex",
    "RetryConfig",
    "ScanRecord",
    "ScanResultsView",
    "ScanSnapshot",
    "ScanSubEntry",
    "ScanSummary",
    "SelectionError",
    "create_default_http_client",
    "detail",
    "load_settings",
    "normalize",
    "project",
    "setup_logging",
    "validate_selection",
    "__version__",
]
