"""Unit tests for AsyncioTickScheduler."""

import asyncio

import pytest

from pomoclock.core.scheduler import AsyncioTickScheduler

INTERVAL = 0.01


class TestAsyncioTickScheduler:
    def test_not_armed_initially(self):
        assert not AsyncioTickScheduler().is_armed

    def test_fires_repeatedly(self):
        async def scenario():
            scheduler = AsyncioTickScheduler()
            calls = []
            scheduler.arm(lambda: calls.append(1), INTERVAL)
            await asyncio.sleep(INTERVAL * 5.5)
            scheduler.disarm()
            return len(calls)

        assert asyncio.run(scenario()) >= 3

    def test_disarm_stops_firing(self):
        async def scenario():
            scheduler = AsyncioTickScheduler()
            calls = []
            scheduler.arm(lambda: calls.append(1), INTERVAL)
            scheduler.disarm()
            await asyncio.sleep(INTERVAL * 3)
            return calls, scheduler.is_armed

        calls, armed = asyncio.run(scenario())
        assert calls == []
        assert not armed

    def test_disarm_is_idempotent(self):
        scheduler = AsyncioTickScheduler()
        scheduler.disarm()
        scheduler.disarm()
        assert not scheduler.is_armed

    def test_rearm_replaces_previous_trigger(self):
        async def scenario():
            scheduler = AsyncioTickScheduler()
            first, second = [], []
            scheduler.arm(lambda: first.append(1), INTERVAL)
            scheduler.arm(lambda: second.append(1), INTERVAL)
            await asyncio.sleep(INTERVAL * 3.5)
            scheduler.disarm()
            return first, second

        first, second = asyncio.run(scenario())
        assert first == []
        assert len(second) >= 1

    def test_callback_can_disarm_itself(self):
        async def scenario():
            scheduler = AsyncioTickScheduler()
            calls = []

            def once():
                calls.append(1)
                scheduler.disarm()

            scheduler.arm(once, INTERVAL)
            await asyncio.sleep(INTERVAL * 4)
            return calls, scheduler.is_armed

        calls, armed = asyncio.run(scenario())
        assert calls == [1]
        assert not armed

    def test_rejects_non_positive_interval(self):
        scheduler = AsyncioTickScheduler()
        with pytest.raises(ValueError):
            scheduler.arm(lambda: None, 0)

    def test_arm_outside_loop_raises(self):
        with pytest.raises(RuntimeError):
            AsyncioTickScheduler().arm(lambda: None)
