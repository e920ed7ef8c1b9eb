# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turn console API responses into model objects."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..core.projection import project_all
from ..errors import ApiError, ErrorCategory, NotFoundError
from ..models.scan import ProjectOverview, ScanSnapshot, ScanSummary


def unwrap(payload: Any) -> Mapping[str, Any]:
    """Return the `data` member of a GraphQL response or raise ApiError for `errors`."""
    if not isinstance(payload, Mapping):
        raise ApiError("Malformed API response", category=ErrorCategory.QUERY_ERROR)
    errors = payload.get("errors")
    if errors:
        messages = [str(err.get("message", err)) if isinstance(err, Mapping) else str(err) for err in errors]
        raise ApiError("; ".join(messages), category=ErrorCategory.QUERY_ERROR)
    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ApiError("API response has no data", category=ErrorCategory.QUERY_ERROR)
    return data


def _first(container: Mapping[str, Any], key: str, what: str) -> Mapping[str, Any]:
    values = container.get(key)
    if not isinstance(values, Sequence) or not values:
        raise NotFoundError(f"{what} not found")
    return values[0]


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _project(data: Mapping[str, Any], team_slug: str, project_slug: str) -> Mapping[str, Any]:
    team = _first(data, "teams", f"Team {team_slug!r}")
    return _first(team, "projects", f"Project {project_slug!r}")


def parse_scan(data: Mapping[str, Any], team_slug: str, project_slug: str, scan_id: str) -> ScanSnapshot:
    scan = _first(_project(data, team_slug, project_slug), "scans", f"Scan {scan_id!r}")
    return ScanSnapshot(
        scan_id=str(scan.get("scanId") or scan_id),
        completed=bool(scan.get("scanCompleted")),
        service_count=_int(scan.get("serviceCount")),
        region_count=_int(scan.get("regionCount")),
        resource_cost=_int(scan.get("resourceCost")),
        items=project_all(scan.get("scanItems")),
    )


def parse_scan_summary(raw: Mapping[str, Any]) -> ScanSummary:
    return ScanSummary(
        scan_id=str(raw.get("scanId") or ""),
        completed=bool(raw.get("scanCompleted")),
        created=_int(raw.get("created")),
        service_count=_int(raw.get("serviceCount")),
        region_count=_int(raw.get("regionCount")),
        resource_cost=_int(raw.get("resourceCost")),
    )


def parse_project(data: Mapping[str, Any], team_slug: str, project_slug: str) -> ProjectOverview:
    project = _project(data, team_slug, project_slug)
    connections = project.get("accountConnections") or ()
    return ProjectOverview(
        project_slug=str(project.get("projectSlug") or project_slug),
        project_name=str(project.get("projectName") or ""),
        scans=tuple(parse_scan_summary(scan) for scan in project.get("scans") or ()),
        account_ids=tuple(str(c.get("accountId")) for c in connections if isinstance(c, Mapping) and c.get("accountId")),
    )


def parse_start_scan(data: Mapping[str, Any]) -> str:
    scan_id = data.get("startScan")
    if not scan_id:
        raise ApiError("startScan returned no scan id", category=ErrorCategory.QUERY_ERROR)
    return str(scan_id)
