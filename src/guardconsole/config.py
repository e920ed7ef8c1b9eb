# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for GuardConsole."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"GuardConsole/{__version__}"
DEFAULT_API_URL = "http://localhost:8080/query"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _positive_int_env(name: str, default: int) -> int:
    parsed = _int_env(name, default)
    return parsed if parsed > 0 else default


@dataclass
class ConsoleSettings:
    """API endpoint, HTTP and polling defaults."""

    api_url: str = DEFAULT_API_URL
    api_token: str | None = None
    environment: str = "development"
    timeout: float = 10.0
    max_retries: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    scan_poll_interval_ms: int = 5000
    overview_poll_interval_ms: int = 10000
    page_size: int = 10

    @classmethod
    def from_env(cls) -> "ConsoleSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            api_url=os.getenv("GUARDCONSOLE_API_URL") or cls.api_url,
            api_token=os.getenv("GUARDCONSOLE_API_TOKEN") or None,
            environment=os.getenv("GUARDCONSOLE_ENV") or cls.environment,
            timeout=_float_env("GUARDCONSOLE_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("GUARDCONSOLE_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("GUARDCONSOLE_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("GUARDCONSOLE_HTTP_INITIAL_DELAY", cls.initial_delay),
            user_agent=os.getenv("GUARDCONSOLE_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("GUARDCONSOLE_HTTP_VERIFY_SSL", cls.verify_ssl),
            scan_poll_interval_ms=_positive_int_env("GUARDCONSOLE_SCAN_POLL_MS", cls.scan_poll_interval_ms),
            overview_poll_interval_ms=_positive_int_env("GUARDCONSOLE_OVERVIEW_POLL_MS", cls.overview_poll_interval_ms),
            page_size=_positive_int_env("GUARDCONSOLE_PAGE_SIZE", cls.page_size),
        )


def load_settings() -> ConsoleSettings:
    """Load console settings from environment with sensible defaults."""
    return ConsoleSettings.from_env()
