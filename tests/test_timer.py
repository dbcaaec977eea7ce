"""Tests for the polled and asyncio playback timers."""
import asyncio

from engine.timer import AsyncioTimer, PolledTimer


class TestPolledTimer:
    def test_not_due_yet(self, timer, clock):
        fired = []
        timer.start(1000, lambda: fired.append(1))
        clock.advance(0.5)
        assert timer.poll() == 0
        assert fired == []
        assert timer.active

    def test_fires_and_catches_up(self, timer, clock):
        fired = []
        timer.start(500, lambda: fired.append(1))
        clock.advance(1.75)
        assert timer.poll() == 3
        assert len(fired) == 3
        # next tick is scheduled from the previous due time, not from now
        clock.advance(0.25)
        assert timer.poll() == 1

    def test_cancel_stops_ticks(self, timer, clock):
        fired = []
        timer.start(100, lambda: fired.append(1))
        timer.cancel()
        clock.advance(10)
        assert timer.poll() == 0
        assert not timer.active

    def test_restart_replaces_schedule(self, timer, clock):
        first, second = [], []
        timer.start(100, lambda: first.append(1))
        clock.advance(0.05)
        timer.start(1000, lambda: second.append(1))
        clock.advance(0.1)
        timer.poll()
        assert first == []
        assert second == []

    def test_callback_cancelling_stops_loop(self, timer, clock):
        fired = []

        def cb():
            fired.append(1)
            timer.cancel()

        timer.start(100, cb)
        clock.advance(1)
        assert timer.poll() == 1
        assert fired == [1]

    def test_callback_restart_breaks_catch_up(self, timer, clock):
        fired = []

        def cb():
            fired.append(1)
            timer.start(100, cb)

        timer.start(100, cb)
        clock.advance(1)
        assert timer.poll() == 1
        assert timer.active


class TestAsyncioTimer:
    def test_repeats_until_cancelled(self):
        async def run():
            timer = AsyncioTimer()
            fired = []

            def cb():
                fired.append(1)
                if len(fired) == 3:
                    timer.cancel()

            timer.start(10, cb)
            await asyncio.sleep(0.2)
            return fired, timer.active

        fired, active = asyncio.run(run())
        assert fired == [1, 1, 1]
        assert not active

    def test_cancel_before_first_tick(self):
        async def run():
            timer = AsyncioTimer()
            fired = []
            timer.start(20, lambda: fired.append(1))
            timer.cancel()
            await asyncio.sleep(0.06)
            return fired

        assert asyncio.run(run()) == []
