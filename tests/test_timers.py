# test_timers.py

import pytest
import asyncio

from typemorph.scheduling import TimerRegistry


class TestTimerRegistry:
    """Cancellable sleeps and timer bookkeeping."""

    def setup_method(self):
        self.timers = TimerRegistry()

    @pytest.mark.asyncio
    async def test_sleep_elapses_and_releases_handle(self):
        token = self.timers.token()
        assert await self.timers.sleep(0.01, token) is True
        assert len(self.timers) == 0

    @pytest.mark.asyncio
    async def test_handle_is_registered_while_pending(self):
        token = self.timers.token()
        task = asyncio.create_task(self.timers.sleep(5, token))
        await asyncio.sleep(0)
        assert len(self.timers) == 1
        token.cancel()
        assert len(self.timers) == 0
        assert await task is False

    @pytest.mark.asyncio
    async def test_cancel_wakes_sleeper_early(self):
        token = self.timers.token()
        loop = asyncio.get_running_loop()
        started = loop.time()
        task = asyncio.create_task(self.timers.sleep(10, token))
        await asyncio.sleep(0.01)
        token.cancel()
        assert await task is False
        assert loop.time() - started < 1

    @pytest.mark.asyncio
    async def test_cancelled_token_does_not_schedule(self):
        token = self.timers.token()
        token.cancel()
        assert await self.timers.sleep(10, token) is False
        assert len(self.timers) == 0

    @pytest.mark.asyncio
    async def test_cancel_only_touches_own_timers(self):
        first, second = self.timers.token("first"), self.timers.token("second")
        a = asyncio.create_task(self.timers.sleep(10, first))
        b = asyncio.create_task(self.timers.sleep(10, second))
        await asyncio.sleep(0)
        assert len(self.timers) == 2

        first.cancel()
        assert len(self.timers) == 1
        assert await a is False
        assert not b.done()

        second.cancel()
        assert await b is False
        assert len(self.timers) == 0

    @pytest.mark.asyncio
    async def test_task_cancellation_releases_handle(self):
        token = self.timers.token()
        task = asyncio.create_task(self.timers.sleep(10, token))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(self.timers) == 0

    @pytest.mark.asyncio
    async def test_clear_releases_everything(self):
        tasks = [asyncio.create_task(self.timers.sleep(10, self.timers.token())) for _ in range(3)]
        await asyncio.sleep(0)
        assert self.timers.clear() == 3
        assert len(self.timers) == 0
        await asyncio.gather(*tasks)

    def test_cancel_is_idempotent(self):
        token = self.timers.token()
        token.cancel()
        token.cancel()
        assert token.cancelled
