# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Detail projection for a selected scan record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models.scan import ScanRecord, ScanSubEntry
from .display import COMMAND_DISCLAIMER, format_resource_cost


@dataclass(frozen=True)
class EntryDetail:
    title: str
    summary: str
    remedy: str
    commands: tuple[str, ...]
    findings: tuple[str, ...]
    resource_cost: int

    @property
    def has_commands(self) -> bool:
        return bool(self.commands)

    @property
    def disclaimer(self) -> str | None:
        return COMMAND_DISCLAIMER if self.commands else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "summary": self.summary,
            "remedy": self.remedy,
            "commands": list(self.commands),
            "findings": list(self.findings),
            "resource_cost": format_resource_cost(self.resource_cost),
        }


@dataclass(frozen=True)
class DisplayDetail:
    service: str
    region: str
    summary: str
    remedy: str
    entries: tuple[EntryDetail, ...]

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def to_dict(self) -> dict[str, Any]:
        return {
            "service": self.service,
            "region": self.region,
            "summary": self.summary,
            "remedy": self.remedy,
            "entries": [entry.to_dict() for entry in self.entries],
        }


def _entry_detail(entry: ScanSubEntry) -> EntryDetail:
    return EntryDetail(
        title=entry.title,
        summary=entry.summary,
        remedy=entry.remedy,
        commands=tuple(cmd for cmd in entry.commands if cmd),
        findings=entry.findings,
        resource_cost=entry.resource_cost,
    )


def detail(record: ScanRecord) -> DisplayDetail:
    """Read-only detail view; entries keep source order and are never re-sorted."""
    return DisplayDetail(
        service=record.service,
        region=record.region,
        summary=record.summary,
        remedy=record.remedy,
        entries=tuple(_entry_detail(entry) for entry in record.entries),
    )
