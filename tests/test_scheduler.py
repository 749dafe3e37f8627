"""Tests for the asyncio scheduler."""

import pytest

from animaltiles.scheduler import AsyncioScheduler


class TestAsyncioScheduler:
    @pytest.mark.asyncio
    async def test_drain_waits_for_nested_spawns(self):
        scheduler = AsyncioScheduler()
        done = []

        async def inner():
            await scheduler.after(5)
            done.append('inner')

        async def outer():
            await scheduler.after(5)
            scheduler.spawn(inner())
            done.append('outer')

        scheduler.spawn(outer())
        await scheduler.drain()
        assert done == ['outer', 'inner']

    @pytest.mark.asyncio
    async def test_failed_task_does_not_break_drain(self):
        scheduler = AsyncioScheduler()

        async def boom():
            raise RuntimeError('boom')

        scheduler.spawn(boom())
        await scheduler.drain()

    def test_now_is_epoch_ms(self):
        assert AsyncioScheduler().now() > 1_600_000_000_000
