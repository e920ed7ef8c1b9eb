# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Console API clients for the scan query and mutation endpoints."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..catalog import validate_selection
from ..config import ConsoleSettings, load_settings
from ..errors import ApiError, ErrorCategory, categorize_error_type, categorize_status
from ..http.client import (
    AsyncHttpClient,
    HttpClient,
    create_default_async_http_client,
    create_default_http_client,
)
from ..http.models import HttpRequest, HttpResponse, RetryConfig
from ..http.retry import send_with_retries
from ..models.scan import ProjectOverview, ScanSnapshot
from . import documents
from .parse import parse_project, parse_scan, parse_start_scan, unwrap

logger = logging.getLogger(__name__)


class _ConsoleApiBase:
    def __init__(self, settings: ConsoleSettings | None = None):
        self.settings = settings or load_settings()

    def _headers(self) -> dict[str, str]:
        headers = {"X-Guard-Env": self.settings.environment}
        if self.settings.api_token:
            headers["Authorization"] = f"Bearer {self.settings.api_token}"
        return headers

    def _build(self, document: str, variables: Mapping[str, Any]) -> HttpRequest:
        return HttpRequest.json_post(
            self.settings.api_url,
            {"query": document, "variables": dict(variables)},
            headers=self._headers(),
        )

    def _decode(self, response: HttpResponse) -> Mapping[str, Any]:
        if not response.ok:
            raise ApiError(
                response.error_message or "Request failed",
                category=categorize_error_type(response.error_type),
            )
        if not response.is_success:
            raise ApiError(
                f"HTTP {response.status_code}",
                category=categorize_status(response.status_code),
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON from API: {exc}", category=ErrorCategory.QUERY_ERROR) from exc
        return unwrap(payload)

    @staticmethod
    def _scan_variables(team_slug: str, project_slug: str, scan_id: str) -> dict[str, str]:
        return {"teamSlug": team_slug, "projectSlug": project_slug, "scanId": scan_id}

    @staticmethod
    def _start_variables(team_slug: str, project_slug: str, services: Iterable[str], regions: Iterable[str]) -> dict[str, Any]:
        # Raises before any request is built.
        chosen_services, chosen_regions = validate_selection(services, regions)
        return {"teamSlug": team_slug, "projectSlug": project_slug, "services": chosen_services, "regions": chosen_regions}


class ConsoleApi(_ConsoleApiBase):
    """Synchronous client; transport failures are retried per RetryConfig."""

    def __init__(
        self,
        http_client: HttpClient | None = None,
        settings: ConsoleSettings | None = None,
        retry_config: RetryConfig | None = None,
    ):
        super().__init__(settings)
        self.http_client = http_client or create_default_http_client(self.settings)
        self.retry_config = retry_config or RetryConfig.from_settings(self.settings)

    def _execute(self, document: str, variables: Mapping[str, Any]) -> Mapping[str, Any]:
        response = send_with_retries(self.http_client, self._build(document, variables), retry_config=self.retry_config)
        return self._decode(response)

    def get_scan(self, team_slug: str, project_slug: str, scan_id: str) -> ScanSnapshot:
        data = self._execute(documents.GET_SCAN, self._scan_variables(team_slug, project_slug, scan_id))
        return parse_scan(data, team_slug, project_slug, scan_id)

    def get_project(self, team_slug: str, project_slug: str) -> ProjectOverview:
        data = self._execute(documents.GET_PROJECT, {"teamSlug": team_slug, "projectSlug": project_slug})
        return parse_project(data, team_slug, project_slug)

    def start_scan(self, team_slug: str, project_slug: str, services: Iterable[str], regions: Iterable[str]) -> str:
        variables = self._start_variables(team_slug, project_slug, services, regions)
        scan_id = parse_start_scan(self._execute(documents.START_SCAN, variables))
        logger.info("Started scan %s for %s/%s", scan_id, team_slug, project_slug)
        return scan_id

    def close(self) -> None:
        self.http_client.close()


class AsyncConsoleApi(_ConsoleApiBase):
    """Async client used by pollers; a failed request is retried by the next tick."""

    def __init__(self, http_client: AsyncHttpClient | None = None, settings: ConsoleSettings | None = None):
        super().__init__(settings)
        self.http_client = http_client or create_default_async_http_client(self.settings)

    async def _execute(self, document: str, variables: Mapping[str, Any]) -> Mapping[str, Any]:
        response = await self.http_client.request(self._build(document, variables))
        return self._decode(response)

    async def get_scan(self, team_slug: str, project_slug: str, scan_id: str) -> ScanSnapshot:
        data = await self._execute(documents.GET_SCAN, self._scan_variables(team_slug, project_slug, scan_id))
        return parse_scan(data, team_slug, project_slug, scan_id)

    async def get_project(self, team_slug: str, project_slug: str) -> ProjectOverview:
        data = await self._execute(documents.GET_PROJECT, {"teamSlug": team_slug, "projectSlug": project_slug})
        return parse_project(data, team_slug, project_slug)

    async def start_scan(self, team_slug: str, project_slug: str, services: Iterable[str], regions: Iterable[str]) -> str:
        variables = self._start_variables(team_slug, project_slug, services, regions)
        return parse_start_scan(await self._execute(documents.START_SCAN, variables))

    async def aclose(self) -> None:
        await self.http_client.aclose()
