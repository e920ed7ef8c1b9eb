# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Project raw scan item payloads into normalized, render-ready records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..models.scan import ScanRecord, ScanSubEntry
from .normalize import normalize, normalize_all, normalize_commands


def _get(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _cost(raw: Mapping[str, Any]) -> int:
    # Costs pass through untouched; only an absent value becomes 0.
    value = _get(raw, "resourceCost", "resource_cost", default=0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def project_entry(raw_entry: Mapping[str, Any]) -> ScanSubEntry:
    return ScanSubEntry(
        title=normalize(_get(raw_entry, "title", default="")),
        summary=normalize(_get(raw_entry, "summary", default="")),
        remedy=normalize(_get(raw_entry, "remedy", default="")),
        commands=normalize_commands(_get(raw_entry, "commands", default=())),
        findings=normalize_all(_get(raw_entry, "findings", default=())),
        resource_cost=_cost(raw_entry),
    )


def project(raw_item: Mapping[str, Any]) -> ScanRecord:
    """Map one raw scan item (camelCase or snake_case keys) to a ScanRecord."""
    raw_entries = _get(raw_item, "scanItemEntries", "entries", default=())
    return ScanRecord(
        service=normalize(_get(raw_item, "service", default="")),
        region=normalize(_get(raw_item, "region", default="")),
        summary=normalize(_get(raw_item, "summary", default="")),
        remedy=normalize(_get(raw_item, "remedy", default="")),
        findings=normalize_all(_get(raw_item, "findings", default=())),
        resource_cost=_cost(raw_item),
        entries=tuple(project_entry(entry) for entry in raw_entries),
    )


def project_all(raw_items: Iterable[Mapping[str, Any]] | None) -> tuple[ScanRecord, ...]:
    return tuple(project(item) for item in raw_items or ())
