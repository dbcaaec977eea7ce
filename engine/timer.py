"""
timer.py — Playback timers
============================
A PlaybackTimer owns at most ONE repeating tick.  start() always cancels
the previous tick first, and cancel() guarantees the callback will not
fire again from this timer.

    AsyncioTimer – repeats via loop.call_later on a running event loop
    PolledTimer  – fires due ticks when poll() is called from an outside
                   loop (e.g. the browser polling the web app), measured
                   on a monotonic clock

The Stepper is the only caller.  Nothing else should hold a handle.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PlaybackTimer:
    """Interface.  Intervals are in milliseconds."""

    def start(self, interval_ms: float, callback: Callable[[], None]) -> None:
        raise NotImplementedError

    def cancel(self) -> None:
        raise NotImplementedError

    @property
    def active(self) -> bool:
        raise NotImplementedError

    def poll(self) -> int:
        """Fire any ticks that are due.  Returns how many fired."""
        return 0


# ---------------------------------------------------------------------------
# asyncio
# ---------------------------------------------------------------------------
class AsyncioTimer(PlaybackTimer):
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._interval_s = 0.0
        self._callback: Optional[Callable[[], None]] = None

    def start(self, interval_ms: float, callback: Callable[[], None]) -> None:
        self.cancel()
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._interval_s = interval_ms / 1000.0
        self._callback = callback
        self._handle = self._loop.call_later(self._interval_s, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def _fire(self) -> None:
        callback = self._callback
        # rearm before the callback, which may cancel or restart us
        self._handle = self._loop.call_later(self._interval_s, self._fire)
        if callback is not None:
            callback()


# ---------------------------------------------------------------------------
# Polled
# ---------------------------------------------------------------------------
class PolledTimer(PlaybackTimer):
    """
    Attributes:
        clock : Returns seconds on a monotonic scale (time.monotonic by default).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._interval_s = 0.0
        self._next_due: Optional[float] = None
        self._callback: Optional[Callable[[], None]] = None
        self._arm_count = 0

    def start(self, interval_ms: float, callback: Callable[[], None]) -> None:
        self.cancel()
        self._interval_s = interval_ms / 1000.0
        self._callback = callback
        self._next_due = self.clock() + self._interval_s
        self._arm_count += 1

    def cancel(self) -> None:
        self._next_due = None
        self._callback = None

    @property
    def active(self) -> bool:
        return self._next_due is not None

    def poll(self) -> int:
        fired = 0
        arm = self._arm_count
        now = self.clock()
        while self._next_due is not None and now >= self._next_due:
            self._next_due += self._interval_s
            self._callback()
            fired += 1
            if self._arm_count != arm:
                # the callback restarted us; the new schedule starts from now
                break
        if fired > 1:
            logger.debug("caught up %d ticks", fired)
        return fired
