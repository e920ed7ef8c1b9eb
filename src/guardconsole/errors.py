# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    RATE_LIMITED = "RATE_LIMITED"
    UNAUTHORIZED = "UNAUTHORIZED"
    SERVER_ERROR = "SERVER_ERROR"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    QUERY_ERROR = "QUERY_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class GuardConsoleError(Exception):
    """Base class for errors raised by GuardConsole."""


class SelectionError(GuardConsoleError, ValueError):
    """A scan was requested with an empty or unknown service/region selection."""


class ApiError(GuardConsoleError):
    """The remote query or mutation endpoint did not return usable data."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.status_code = status_code

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class NotFoundError(ApiError):
    """Team, project or scan is absent from the response payload."""

    def __init__(self, message: str):
        super().__init__(message, category=ErrorCategory.QUERY_ERROR)


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, ApiError):
        return exc.category

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    if getattr(exc, "response", None) is not None:
        return categorize_status(getattr(exc.response, "status_code", None))

    return ErrorCategory.UNKNOWN_ERROR


_CONNECTION_ERROR_TYPES = {
    "ConnectError",
    "NetworkError",
    "ProxyError",
    "ReadError",
    "RemoteProtocolError",
    "WriteError",
    "ConnectionError",
    "ConnectionRefusedError",
    "ConnectionResetError",
}


def categorize_error_type(error_type: str | None) -> ErrorCategory:
    """Categorize a transport failure recorded on an HttpResponse by exception class name."""
    name = error_type or ""
    if "Timeout" in name:
        return ErrorCategory.TIMEOUT
    if name in _CONNECTION_ERROR_TYPES:
        return ErrorCategory.CONNECTION_ERROR
    if "SSL" in name or "Certificate" in name:
        return ErrorCategory.SSL_ERROR
    if name == "gaierror":
        return ErrorCategory.DNS_ERROR
    return ErrorCategory.UNKNOWN_ERROR


def categorize_status(status: int | None) -> ErrorCategory:
    if status is None:
        return ErrorCategory.UNKNOWN_ERROR
    if status in (401, 403):
        return ErrorCategory.UNAUTHORIZED
    if status == 429:
        return ErrorCategory.RATE_LIMITED
    if status >= 500:
        return ErrorCategory.SERVER_ERROR
    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while contacting the API",
        ErrorCategory.RATE_LIMITED: "API rate limit reached",
        ErrorCategory.UNAUTHORIZED: "API rejected the credentials",
        ErrorCategory.SERVER_ERROR: "API server error",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.QUERY_ERROR: "API returned an error for the query",
        ErrorCategory.UNKNOWN_ERROR: "Network error while contacting the API",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")
