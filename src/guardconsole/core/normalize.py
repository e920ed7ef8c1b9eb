# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cleanup for text fields produced by the upstream findings generator."""

from __future__ import annotations

_QUOTES = ('"', "'")


def normalize(raw: str | None) -> str:
    """
    Unescape quotes and strip one layer of matching wrapping quotes.

    Only a single layer is removed: a value wrapped twice keeps its inner
    pair of quotes. Mismatched wrapping (``"x'``) is left as-is.
    """
    if not raw:
        return ""
    cleaned = raw.replace('\\"', '"').replace("\\'", "'")
    if len(cleaned) >= 2 and cleaned[0] in _QUOTES and cleaned[0] == cleaned[-1]:
        cleaned = cleaned[1:-1]
    return cleaned


def normalize_all(values) -> tuple[str, ...]:
    return tuple(normalize(value) for value in values or ())


def normalize_commands(values) -> tuple[str, ...]:
    """Normalize commands and drop the ones that end up empty, keeping order."""
    return tuple(cmd for cmd in normalize_all(values) if cmd)
