# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared fixtures: a hand-driven scheduler and raw payload builders."""

from __future__ import annotations

import asyncio

import pytest


class ManualTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose timers only fire when the test says so."""

    def __init__(self):
        self.timers: list[ManualTimer] = []
        self.tasks: list[asyncio.Task] = []

    def call_later(self, delay, callback):
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def spawn(self, coro):
        task = asyncio.get_running_loop().create_task(coro)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire(self) -> bool:
        pending = self.pending
        if not pending:
            return False
        timer = pending[0]
        timer.fired = True
        timer.callback()
        return True

    async def drain(self, rounds: int = 10) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)

    async def tick(self) -> bool:
        fired = self.fire()
        await self.drain()
        return fired


@pytest.fixture
def scheduler():
    return ManualScheduler()


def raw_entry(title="Enable versioning", commands=("aws s3api put-bucket-versioning",), **overrides):
    entry = {
        "title": title,
        "summary": "Bucket versioning is disabled",
        "remedy": "Turn on versioning",
        "commands": list(commands),
        "findings": ["versioning off"],
        "resourceCost": 1,
    }
    entry.update(overrides)
    return entry


def raw_item(service="s3", region="us-east-1", entries=None, **overrides):
    item = {
        "service": service,
        "region": region,
        "summary": f"Findings for {service}",
        "remedy": "Apply the listed fixes",
        "findings": ["public bucket"],
        "resourceCost": 3,
        "scanItemEntries": [raw_entry()] if entries is None else entries,
    }
    item.update(overrides)
    return item


def scan_response(items=(), completed=False, scan_id="scan-1"):
    return {
        "data": {
            "teams": [
                {
                    "projects": [
                        {
                            "scans": [
                                {
                                    "scanId": scan_id,
                                    "scanCompleted": completed,
                                    "serviceCount": 1,
                                    "regionCount": 1,
                                    "resourceCost": 4,
                                    "scanItems": list(items),
                                }
                            ]
                        }
                    ]
                }
            ]
        }
    }


@pytest.fixture
def make_raw_item():
    return raw_item


@pytest.fixture
def make_raw_entry():
    return raw_entry


@pytest.fixture
def make_scan_response():
    return scan_response
