# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Formatting helpers shared by table and detail views."""

from __future__ import annotations

import time
from datetime import datetime

PLACEHOLDER = "-"
SCAN_IN_PROGRESS = "Scan in progress..."
SCAN_COMPLETED = "Scan completed"
AWS_CLI_DOCS_URL = "https://docs.aws.amazon.com/cli/latest/reference/#available-services"
COMMAND_DISCLAIMER = (
    "Disclaimer: These commands are for guidance only. Please review and validate them "
    "to ensure they align with your environment's specific configurations. "
    f"Refer to AWS CLI Documentation: {AWS_CLI_DOCS_URL}"
)


def format_resource_cost(cost: float | int | None) -> str:
    if not cost:
        return PLACEHOLDER
    # Half-up like the web console, not banker's rounding.
    return str(int(cost + 0.5))


def status_text(completed: bool) -> str:
    return SCAN_COMPLETED if completed else SCAN_IN_PROGRESS


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit if value == 1 else unit + 's'}"


def time_since(created: int | float, now: float | None = None, *, full: bool = False) -> str:
    """Elapsed time since a unix timestamp (seconds): ``3d``, ``2h``, ``5m`` or ``3 days``."""
    current = time.time() if now is None else now
    minutes = int((current - created) // 60)
    hours = minutes // 60
    days = hours // 24
    if days >= 1:
        return _plural(days, "day") if full else f"{days}d"
    if hours >= 1:
        return _plural(hours, "hour") if full else f"{hours}h"
    return _plural(minutes, "minute") if full else f"{minutes}m"


# Locale-independent month names.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_timestamp(created: int | float, tz=None) -> str:
    """Render a unix timestamp as ``Oct 19, 3pm``."""
    moment = datetime.fromtimestamp(created, tz)
    hour = moment.hour % 12 or 12
    suffix = "am" if moment.hour < 12 else "pm"
    return f"{_MONTHS[moment.month - 1]} {moment.day}, {hour}{suffix}"


def scan_label(created: int | float, tz=None) -> str:
    return f"{format_timestamp(created, tz)} scan"
