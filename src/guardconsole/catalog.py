# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Services and regions a scan may target."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import SelectionError

AWS_SERVICES: dict[str, str] = {
    "s3": "S3",
    "ec2": "EC2",
    "ecs": "ECS",
    "lambda": "Lambda",
    "dynamodb": "DynamoDB",
    "iam": "IAM",
}

AWS_REGIONS: dict[str, str] = {
    "us-east-1": "us-east-1 (US East - N. Virginia)",
    "us-west-2": "us-west-2 (US West - Oregon)",
    "us-east-2": "us-east-2 (US East - Ohio)",
    "us-west-1": "us-west-1 (US West - N. California)",
    "ca-central-1": "ca-central-1 (Canada - Central)",
    "eu-west-1": "eu-west-1 (Europe - Ireland)",
    "eu-central-1": "eu-central-1 (Europe - Frankfurt)",
    "eu-west-2": "eu-west-2 (Europe - London)",
    "eu-north-1": "eu-north-1 (Europe - Stockholm)",
    "ap-northeast-1": "ap-northeast-1 (Asia Pacific - Tokyo)",
    "ap-southeast-1": "ap-southeast-1 (Asia Pacific - Singapore)",
    "ap-southeast-2": "ap-southeast-2 (Asia Pacific - Sydney)",
    "ap-south-1": "ap-south-1 (Asia Pacific - Mumbai)",
}


def _dedupe(values: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value.strip(), None)
    return [value for value in seen if value]


def toggle(selection: list[str], value: str) -> list[str]:
    """Add `value` to a selection, or remove it if already selected. Returns a new list."""
    if value in selection:
        return [item for item in selection if item != value]
    return [*selection, value]


def validate_selection(services: Iterable[str], regions: Iterable[str]) -> tuple[list[str], list[str]]:
    """
    Check a scan selection against the allow-lists.

    Returns de-duplicated lists in selection order, or raises SelectionError
    when either set is empty or contains an unknown code.
    """
    chosen_services = _dedupe(services)
    chosen_regions = _dedupe(regions)
    if not chosen_services:
        raise SelectionError("Select at least one service to scan")
    if not chosen_regions:
        raise SelectionError("Select at least one region to scan")
    unknown_services = [s for s in chosen_services if s not in AWS_SERVICES]
    if unknown_services:
        raise SelectionError(f"Unknown service(s): {', '.join(unknown_services)}")
    unknown_regions = [r for r in chosen_regions if r not in AWS_REGIONS]
    if unknown_regions:
        raise SelectionError(f"Unknown region(s): {', '.join(unknown_regions)}")
    return chosen_services, chosen_regions
