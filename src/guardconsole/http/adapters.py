# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable clients for tests and offline fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from .client import AsyncHttpClient, HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


def json_response(payload: Any, status_code: int = 200) -> HttpResponse:
    return HttpResponse(ok=True, status_code=status_code, text=json.dumps(payload), headers={"content-type": "application/json"})


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests."""

    def __init__(self, responses: list[HttpResponse] | Responder | None = None):
        self._responses = responses if responses is not None else []
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, response: HttpResponse) -> None:
        if callable(self._responses):
            raise TypeError("StubHttpClient configured with a responder callable")
        self._responses.append(response)

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if callable(self._responses):
            return self._responses(request)
        if self._responses:
            return self._responses[min(len(self.requests), len(self._responses)) - 1]
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    @property
    def payloads(self) -> list[Any]:
        return [json.loads(r.body) for r in self.requests if isinstance(r.body, str)]

    def close(self) -> None:
        self.closed = True


class AsyncStubHttpClient(AsyncHttpClient):
    """Async wrapper around StubHttpClient sharing its request log."""

    def __init__(self, responses: list[HttpResponse] | Responder | None = None):
        self.stub = StubHttpClient(responses)
        self.closed = False

    @property
    def requests(self) -> list[HttpRequest]:
        return self.stub.requests

    async def request(self, request: HttpRequest) -> HttpResponse:
        return self.stub.request(request)

    async def aclose(self) -> None:
        self.closed = True
