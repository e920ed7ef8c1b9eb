# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Polling state machine for scan status and project overviews.

A controller moves IDLE -> POLLING on `start` and, when `settle_on_complete`
is set, POLLING -> SETTLED the first time a fetched snapshot reports
completion. SETTLED is terminal until `reset`. Ticks fire on a fixed
interval; a tick that finds a fetch still in flight is skipped, so at most
one fetch per controller is ever outstanding and snapshots apply in the order
they were requested. Stopping cancels the timer synchronously and bumps a
generation counter so late fetch results are dropped.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from ..errors import categorize_exception

logger = logging.getLogger(__name__)

S = TypeVar("S")
FetchFn = Callable[[], Any]
SnapshotCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class PollingState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    SETTLED = "settled"


class Cancellable(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    """Timer and task source; the default is the running asyncio loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...

    def spawn(self, coro: Awaitable[None]) -> Cancellable: ...


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._tasks: set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)

    def spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        task = self.loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


class Subscription:
    """Handle returned by `subscribe`/`start`; unsubscribing twice is harmless."""

    def __init__(self, cancel: Callable[[], None] | None = None):
        self._cancel = cancel

    @property
    def active(self) -> bool:
        return self._cancel is not None

    def unsubscribe(self) -> None:
        cancel, self._cancel = self._cancel, None
        if cancel is not None:
            cancel()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.unsubscribe()


def _default_is_complete(snapshot: Any) -> bool:
    return bool(getattr(snapshot, "completed", False))


class PollingController(Generic[S]):
    """Fixed-interval poller with a one-way transition into SETTLED."""

    def __init__(
        self,
        *,
        settle_on_complete: bool = True,
        scheduler: Scheduler | None = None,
        is_complete: Callable[[S], bool] = _default_is_complete,
        name: str = "scan",
    ):
        self.name = name
        self.settle_on_complete = settle_on_complete
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._is_complete = is_complete
        self._subscribers: dict[int, tuple[SnapshotCallback, ErrorCallback | None]] = {}
        self._next_subscriber = 0
        self._init_state()

    def _init_state(self) -> None:
        self.state = PollingState.IDLE
        self.interval_ms: int | None = None
        self.snapshot: S | None = None
        self.last_error: BaseException | None = None
        self.fetch_count = 0
        self.skipped_ticks = 0
        self._fetch: FetchFn | None = None
        self._timer: Cancellable | None = None
        self._task: Cancellable | None = None
        self._in_flight = False
        self._generation = 0
        self._settled = asyncio.Event()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def stale(self) -> bool:
        """True while the latest fetch failed and an older snapshot is shown."""
        return self.last_error is not None

    def subscribe(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback | None = None) -> Subscription:
        key = self._next_subscriber
        self._next_subscriber += 1
        self._subscribers[key] = (on_snapshot, on_error)
        return Subscription(lambda: self._subscribers.pop(key, None))

    def start(self, fetch: FetchFn, interval_ms: int) -> Subscription:
        if self.state is PollingState.SETTLED:
            logger.warning("%s poller already settled; ignoring restart", self.name)
            return Subscription()
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if self.state is PollingState.POLLING:
            self._teardown()
        self._fetch = fetch
        self.interval_ms = interval_ms
        self.state = PollingState.POLLING
        self._generation += 1
        logger.debug("%s poller started (interval=%dms)", self.name, interval_ms)
        self._timer = self._scheduler.call_later(0, self._on_tick)
        return Subscription(self.stop)

    def stop(self) -> None:
        """Cancel the schedule; any pending fetch result is discarded."""
        if self.state is PollingState.POLLING:
            self._teardown()
            self.state = PollingState.IDLE
            logger.debug("%s poller stopped", self.name)

    def reset(self) -> None:
        """Reinitialise the controller, allowing a settled poller to start again."""
        self._teardown()
        generation = self._generation
        self._init_state()
        self._generation = generation

    async def wait_settled(self) -> S | None:
        await self._settled.wait()
        return self.snapshot

    def _teardown(self) -> None:
        self._generation += 1
        self._cancel_timer()
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
        self._in_flight = False

    def _cancel_timer(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _on_tick(self) -> None:
        self._timer = None
        if self.state is not PollingState.POLLING:
            return
        self._timer = self._scheduler.call_later(self.interval_ms / 1000.0, self._on_tick)
        if self._in_flight:
            self.skipped_ticks += 1
            logger.debug("%s poll tick skipped; previous fetch still pending", self.name)
            return
        self._in_flight = True
        self.fetch_count += 1
        self._task = self._scheduler.spawn(self._run_fetch(self._generation))

    async def _run_fetch(self, generation: int) -> None:
        try:
            result = self._fetch()
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:  # noqa: BLE001
            if generation == self._generation:
                self._on_failure(exc)
        else:
            if generation == self._generation:
                self._on_success(result)
        finally:
            if generation == self._generation:
                self._in_flight = False
                self._task = None

    def _on_success(self, snapshot: S) -> None:
        self.snapshot = snapshot
        self.last_error = None
        generation = self._generation
        for on_snapshot, _ in list(self._subscribers.values()):
            try:
                on_snapshot(snapshot)
            except Exception:  # noqa: BLE001
                logger.exception("%s poll subscriber failed", self.name)
        # A subscriber may have stopped or reset the controller.
        if generation != self._generation or self.state is not PollingState.POLLING:
            return
        if self.settle_on_complete and self._is_complete(snapshot):
            self._settle()

    def _on_failure(self, exc: Exception) -> None:
        self.last_error = exc
        logger.warning("%s poll failed (%s): %s", self.name, categorize_exception(exc).value, exc)
        for _, on_error in list(self._subscribers.values()):
            if on_error is None:
                continue
            try:
                on_error(exc)
            except Exception:  # noqa: BLE001
                logger.exception("%s poll error subscriber failed", self.name)

    def _settle(self) -> None:
        self._cancel_timer()
        self.state = PollingState.SETTLED
        self._settled.set()
        logger.info("%s poller settled after %d fetches", self.name, self.fetch_count)
