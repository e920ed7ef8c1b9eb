# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan result models.

The nested team -> project -> scan -> item -> entry payload is modelled with
explicit frozen dataclasses. Collections are tuples so consumers can only
derive cleaned copies, never mutate source data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ScanSubEntry:
    """Remediation-focused breakdown of a ScanRecord. `title` is not unique."""

    title: str
    summary: str = ""
    remedy: str = ""
    commands: tuple[str, ...] = ()
    findings: tuple[str, ...] = ()
    resource_cost: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "summary": self.summary,
            "remedy": self.remedy,
            "commands": list(self.commands),
            "findings": list(self.findings),
            "resource_cost": self.resource_cost,
        }


@dataclass(frozen=True)
class ScanRecord:
    """One finding bundle for a (service, region) pair; identity is positional."""

    service: str
    region: str
    summary: str = ""
    remedy: str = ""
    findings: tuple[str, ...] = ()
    resource_cost: int = 0
    entries: tuple[ScanSubEntry, ...] = ()

    @property
    def finding_count(self) -> int:
        return len(self.findings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "service": self.service,
            "region": self.region,
            "summary": self.summary,
            "remedy": self.remedy,
            "findings": list(self.findings),
            "resource_cost": self.resource_cost,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class ScanSnapshot:
    """Polled scan state at one point in time; replaced wholesale on every poll."""

    scan_id: str
    completed: bool = False
    service_count: int = 0
    region_count: int = 0
    resource_cost: int = 0
    items: tuple[ScanRecord, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "scan_id": self.scan_id,
            "completed": self.completed,
            "service_count": self.service_count,
            "region_count": self.region_count,
            "resource_cost": self.resource_cost,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class ScanSummary:
    """Row of the project overview scan list. `created` is a unix timestamp in seconds."""

    scan_id: str
    completed: bool = False
    created: int = 0
    service_count: int = 0
    region_count: int = 0
    resource_cost: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "scan_id": self.scan_id,
            "completed": self.completed,
            "created": self.created,
            "service_count": self.service_count,
            "region_count": self.region_count,
            "resource_cost": self.resource_cost,
        }


@dataclass(frozen=True)
class ProjectOverview:
    """Project metadata plus the list of its prior scans."""

    project_slug: str
    project_name: str = ""
    scans: tuple[ScanSummary, ...] = ()
    account_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_slug": self.project_slug,
            "project_name": self.project_name,
            "scans": [scan.to_dict() for scan in self.scans],
            "account_ids": list(self.account_ids),
        }
