# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the API client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from ..config import ConsoleSettings

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None

    @classmethod
    def json_post(cls, url: str, payload: Any, *, headers: Headers | None = None) -> HttpRequest:
        merged = {"Content-Type": "application/json", "Accept": "application/json"}
        merged.update(headers or {})
        return cls(url=url, method="POST", headers=merged, body=json.dumps(payload))


@dataclass
class HttpResponse:
    """Normalized HTTP response; `ok` is False only for transport failures."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


@dataclass
class RetryConfig:
    """Retry policy for HTTP requests derived from ConsoleSettings."""

    max_attempts: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: ConsoleSettings) -> RetryConfig:
        """Build a retry config from the shared ConsoleSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )
