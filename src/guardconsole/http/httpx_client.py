# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementations."""

from __future__ import annotations

import httpx

from ..config import ConsoleSettings, load_settings
from .client import AsyncHttpClient, HttpClient
from .models import HttpRequest, HttpResponse


def _build_headers(settings: ConsoleSettings, request: HttpRequest) -> dict[str, str]:
    headers = dict(request.headers or {})
    headers.setdefault("User-Agent", settings.user_agent)
    return headers


def _to_response(resp: httpx.Response) -> HttpResponse:
    return HttpResponse(
        ok=True,
        status_code=resp.status_code,
        headers={k.lower(): v for k, v in resp.headers.items()},
        text=resp.text,
        url=str(resp.url),
    )


def _error_response(exc: Exception) -> HttpResponse:
    return HttpResponse(
        ok=False,
        error_message=str(exc),
        error_type=type(exc).__name__,
    )


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: ConsoleSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.Client(
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=_build_headers(self.settings, request),
                content=request.body,
                timeout=request.timeout if request.timeout is not None else self.settings.timeout,
            )
            return _to_response(resp)
        except Exception as exc:  # noqa: BLE001
            return _error_response(exc)

    def close(self) -> None:
        self._client.close()


class AsyncHttpxClient(AsyncHttpClient):
    """Asynchronous httpx client wrapper; one request per poll tick."""

    def __init__(self, settings: ConsoleSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.AsyncClient(
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    async def request(self, request: HttpRequest) -> HttpResponse:
        try:
            resp = await self._client.request(
                request.method,
                request.url,
                headers=_build_headers(self.settings, request),
                content=request.body,
                timeout=request.timeout if request.timeout is not None else self.settings.timeout,
            )
            return _to_response(resp)
        except Exception as exc:  # noqa: BLE001
            return _error_response(exc)

    async def aclose(self) -> None:
        await self._client.aclose()
