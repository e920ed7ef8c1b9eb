# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio

import pytest

from guardconsole.core.polling import PollingController, PollingState, Subscription
from guardconsole.models import ProjectOverview, ScanSnapshot


class SequenceFetch:
    def __init__(self, results):
        self._results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self._results[min(self.calls - 1, len(self._results) - 1)]
        if isinstance(result, Exception):
            raise result
        return result


def _snap(completed=False, scan_id="scan-1"):
    return ScanSnapshot(scan_id=scan_id, completed=completed)


@pytest.mark.asyncio
async def test_settles_after_first_completed_snapshot(scheduler):
    fetch = SequenceFetch([_snap(False), _snap(False), _snap(True)])
    controller = PollingController(scheduler=scheduler)
    controller.start(fetch, 5000)
    assert controller.state is PollingState.POLLING

    for _ in range(3):
        assert await scheduler.tick()

    assert fetch.calls == 3
    assert controller.state is PollingState.SETTLED
    assert controller.snapshot.completed is True
    assert scheduler.pending == []
    assert not await scheduler.tick()
    assert fetch.calls == 3


@pytest.mark.asyncio
async def test_ticks_use_the_interval(scheduler):
    controller = PollingController(scheduler=scheduler)
    controller.start(SequenceFetch([_snap()]), 5000)
    assert scheduler.pending[0].delay == 0
    await scheduler.tick()
    assert scheduler.pending[0].delay == 5.0


@pytest.mark.asyncio
async def test_restart_after_settle_is_a_no_op(scheduler):
    fetch = SequenceFetch([_snap(True)])
    controller = PollingController(scheduler=scheduler)
    controller.start(fetch, 5000)
    await scheduler.tick()
    assert controller.state is PollingState.SETTLED

    handle = controller.start(fetch, 5000)
    assert isinstance(handle, Subscription)
    assert not handle.active
    assert scheduler.pending == []
    assert controller.state is PollingState.SETTLED
    assert fetch.calls == 1


@pytest.mark.asyncio
async def test_tick_is_skipped_while_fetch_pending(scheduler):
    release = asyncio.Event()
    calls = 0

    async def slow_fetch():
        nonlocal calls
        calls += 1
        await release.wait()
        return _snap(False)

    controller = PollingController(scheduler=scheduler)
    controller.start(slow_fetch, 5000)
    await scheduler.tick()
    assert controller.in_flight
    for _ in range(3):
        await scheduler.tick()
    assert calls == 1
    assert controller.skipped_ticks == 3

    release.set()
    await scheduler.drain()
    assert not controller.in_flight
    assert controller.snapshot == _snap(False)
    await scheduler.tick()
    assert calls == 2
    controller.stop()


@pytest.mark.asyncio
async def test_failed_fetch_keeps_previous_snapshot(scheduler):
    first = _snap(False)
    fetch = SequenceFetch([first, ConnectionError("boom"), _snap(True)])
    errors = []
    controller = PollingController(scheduler=scheduler)
    controller.subscribe(lambda _s: None, errors.append)
    controller.start(fetch, 5000)

    await scheduler.tick()
    await scheduler.tick()
    assert controller.snapshot is first
    assert controller.stale
    assert isinstance(controller.last_error, ConnectionError)
    assert controller.state is PollingState.POLLING
    assert len(errors) == 1

    await scheduler.tick()
    assert not controller.stale
    assert controller.state is PollingState.SETTLED


@pytest.mark.asyncio
async def test_stop_discards_late_results(scheduler):
    release = asyncio.Event()

    async def slow_fetch():
        await release.wait()
        return _snap(True)

    seen = []
    controller = PollingController(scheduler=scheduler)
    controller.subscribe(seen.append)
    handle = controller.start(slow_fetch, 5000)
    await scheduler.tick()

    handle.unsubscribe()
    controller.stop()
    release.set()
    await scheduler.drain()

    assert controller.state is PollingState.IDLE
    assert controller.snapshot is None
    assert seen == []
    assert scheduler.pending == []


@pytest.mark.asyncio
async def test_sync_fetch_is_supported(scheduler):
    controller = PollingController(scheduler=scheduler)
    controller.start(lambda: _snap(True), 5000)
    await scheduler.tick()
    assert controller.state is PollingState.SETTLED


@pytest.mark.asyncio
async def test_overview_poller_never_settles(scheduler):
    overview = ProjectOverview(project_slug="proj")
    fetch = SequenceFetch([overview])
    controller = PollingController(settle_on_complete=False, scheduler=scheduler, name="project proj")
    controller.start(fetch, 10000)
    for _ in range(4):
        await scheduler.tick()
    assert fetch.calls == 4
    assert controller.state is PollingState.POLLING
    assert scheduler.pending[0].delay == 10.0

    controller.stop()
    assert scheduler.pending == []
    assert not await scheduler.tick()


@pytest.mark.asyncio
async def test_subscribers_receive_snapshots_until_unsubscribed(scheduler):
    seen = []
    controller = PollingController(scheduler=scheduler)
    subscription = controller.subscribe(seen.append)
    controller.start(SequenceFetch([_snap(False, "a"), _snap(False, "b")]), 5000)
    await scheduler.tick()
    subscription.unsubscribe()
    subscription.unsubscribe()
    await scheduler.tick()
    assert [s.scan_id for s in seen] == ["a"]
    assert controller.snapshot.scan_id == "b"
    controller.stop()


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_break_polling(scheduler):
    def bad(_snapshot):
        raise RuntimeError("render failed")

    controller = PollingController(scheduler=scheduler)
    controller.subscribe(bad)
    controller.start(SequenceFetch([_snap(True)]), 5000)
    await scheduler.tick()
    assert controller.state is PollingState.SETTLED


@pytest.mark.asyncio
async def test_reset_allows_polling_again(scheduler):
    fetch = SequenceFetch([_snap(True)])
    controller = PollingController(scheduler=scheduler)
    controller.start(fetch, 5000)
    await scheduler.tick()
    controller.reset()
    assert controller.state is PollingState.IDLE
    assert controller.snapshot is None
    controller.start(fetch, 5000)
    await scheduler.tick()
    assert fetch.calls == 2
    assert controller.state is PollingState.SETTLED


def test_stop_is_idempotent_and_interval_must_be_positive():
    controller = PollingController()
    controller.stop()
    controller.stop()
    with pytest.raises(ValueError):
        controller.start(lambda: None, 0)


@pytest.mark.asyncio
async def test_asyncio_scheduler_end_to_end():
    fetch = SequenceFetch([_snap(False), _snap(True)])
    controller = PollingController()
    controller.start(fetch, 10)
    snapshot = await asyncio.wait_for(controller.wait_settled(), timeout=2.0)
    assert snapshot.completed
    assert fetch.calls == 2
    assert controller.state is PollingState.SETTLED


@pytest.mark.asyncio
async def test_restart_after_settle_ignores_interval(scheduler):
    fetch = SequenceFetch([_snap(True)])
    controller = PollingController(scheduler=scheduler)
    controller.start(fetch, 5000)
    await scheduler.tick()

    handle = controller.start(fetch, 0)
    assert not handle.active
    assert controller.state is PollingState.SETTLED


@pytest.mark.asyncio
async def test_stop_from_subscriber_prevents_settling(scheduler):
    controller = PollingController(scheduler=scheduler)
    controller.subscribe(lambda _snapshot: controller.stop())
    controller.start(SequenceFetch([_snap(True)]), 5000)
    await scheduler.tick()

    assert controller.state is PollingState.IDLE
    assert scheduler.pending == []


@pytest.mark.asyncio
async def test_reset_from_subscriber_allows_new_start(scheduler):
    fetch = SequenceFetch([_snap(True)])
    controller = PollingController(scheduler=scheduler)
    seen = []

    def on_snapshot(snapshot):
        seen.append(snapshot)
        if len(seen) == 1:
            controller.reset()

    controller.subscribe(on_snapshot)
    controller.start(fetch, 5000)
    await scheduler.tick()
    assert controller.state is PollingState.IDLE
    assert controller.snapshot is None
    assert not controller.in_flight

    controller.start(fetch, 5000)
    await scheduler.tick()
    assert fetch.calls == 2
    assert controller.state is PollingState.SETTLED
