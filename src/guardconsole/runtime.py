# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level GuardConsole facade for querying, starting and watching scans."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress

from .api.client import AsyncConsoleApi, ConsoleApi
from .config import ConsoleSettings, load_settings
from .core.polling import PollingController, Scheduler
from .http.client import AsyncHttpClient, HttpClient, create_default_http_client
from .models import ProjectOverview, ScanSnapshot
from .views import ProjectOverviewView, ScanResultsView


class GuardConsole:
    """
    Convenience wrapper that shares one configuration across API calls and pollers.

    One-shot queries and the start-scan mutation go through a synchronous
    client with retries; pollers use an async client so fetches suspend
    instead of blocking the event loop.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        async_http_client: AsyncHttpClient | None = None,
        settings: ConsoleSettings | None = None,
    ):
        self.settings = settings or load_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.api = ConsoleApi(self.http_client, self.settings)
        self._async_http_client = async_http_client
        self._async_api: AsyncConsoleApi | None = None

    @property
    def async_api(self) -> AsyncConsoleApi:
        if self._async_api is None:
            self._async_api = AsyncConsoleApi(self._async_http_client, self.settings)
        return self._async_api

    def scan(self, team_slug: str, project_slug: str, scan_id: str) -> ScanSnapshot:
        return self.api.get_scan(team_slug, project_slug, scan_id)

    def project(self, team_slug: str, project_slug: str) -> ProjectOverview:
        return self.api.get_project(team_slug, project_slug)

    def start_scan(self, team_slug: str, project_slug: str, services: Iterable[str], regions: Iterable[str]) -> str:
        return self.api.start_scan(team_slug, project_slug, services, regions)

    def watch_scan(
        self,
        team_slug: str,
        project_slug: str,
        scan_id: str,
        *,
        interval_ms: int | None = None,
        scheduler: Scheduler | None = None,
    ) -> PollingController[ScanSnapshot]:
        """Poll a scan until it reports completion. Must be called with a running loop."""
        controller: PollingController[ScanSnapshot] = PollingController(scheduler=scheduler, name=f"scan {scan_id}")
        api = self.async_api
        controller.start(
            lambda: api.get_scan(team_slug, project_slug, scan_id),
            interval_ms or self.settings.scan_poll_interval_ms,
        )
        return controller

    def watch_project(
        self,
        team_slug: str,
        project_slug: str,
        *,
        interval_ms: int | None = None,
        scheduler: Scheduler | None = None,
    ) -> PollingController[ProjectOverview]:
        """Poll a project's scan list until the controller is stopped."""
        controller: PollingController[ProjectOverview] = PollingController(
            settle_on_complete=False,
            scheduler=scheduler,
            name=f"project {project_slug}",
        )
        api = self.async_api
        controller.start(
            lambda: api.get_project(team_slug, project_slug),
            interval_ms or self.settings.overview_poll_interval_ms,
        )
        return controller

    def results_view(self, controller: PollingController[ScanSnapshot]) -> ScanResultsView:
        return ScanResultsView(controller, page_size=self.settings.page_size)

    def overview_view(self, controller: PollingController[ProjectOverview]) -> ProjectOverviewView:
        return ProjectOverviewView(controller, page_size=self.settings.page_size)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    async def aclose(self) -> None:
        self.close()
        if self._async_api is not None:
            with suppress(Exception):
                await self._async_api.aclose()

    def __enter__(self) -> GuardConsole:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    async def __aenter__(self) -> GuardConsole:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
