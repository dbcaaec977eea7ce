"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper owns the current execution sequence and a cursor into it.
Every presentation surface (canvas, code panel, transport controls)
renders from `current_step` / `cursor`, never from an index of its own.

State machine:
    IDLE     →  load()           →  PLAYING (autoplay) / READY
    READY    →  play()           →  PLAYING
    PLAYING  →  pause()          →  PAUSED
    PLAYING  →  (end reached)    →  READY
    PAUSED   →  play()           →  PLAYING
    any      →  reset()          →  READY   (cursor 0, sequence kept)
    any      →  clear()          →  IDLE    (sequence dropped)

Timer ownership:
  The Stepper holds exactly one PlaybackTimer.  Every change to the
  playing flag or the speed goes through _rearm_timer(), which cancels
  the running tick before (maybe) starting a new one.

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread or one
  event loop.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from algorithms.step import Step
from engine.timer import PlaybackTimer, PolledTimer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE    = "idle"
    READY   = "ready"
    PLAYING = "playing"
    PAUSED  = "paused"


# ---------------------------------------------------------------------------
# Speed levels (1 = slowest, 5 = fastest)
# ---------------------------------------------------------------------------
MIN_SPEED     = 1
MAX_SPEED     = 5
DEFAULT_SPEED = 3
BASE_INTERVAL_MS = 2000.0


def interval_for(level: int) -> float:
    """Milliseconds between ticks at a speed level."""
    return BASE_INTERVAL_MS / level


def clamp_speed(level: int, lo: int = MIN_SPEED, hi: int = MAX_SPEED) -> int:
    return max(lo, min(hi, int(level)))


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        on_change : Optional callback(Step | None) fired whenever the displayed
                    step changes (cursor move, load, clear).  The UI hooks its
                    re-render here.
    """

    def __init__(
        self,
        timer: Optional[PlaybackTimer] = None,
        speed: int = DEFAULT_SPEED,
        on_change: Optional[Callable[[Optional[Step]], None]] = None,
    ):
        self._timer:   PlaybackTimer = timer or PolledTimer()
        self._steps:   List[Step]    = []
        self._cursor:  int           = 0
        self._playing: bool          = False
        self._paused:  bool          = False
        self._speed:   int           = clamp_speed(speed)
        self.on_change = on_change

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step], autoplay: bool = True) -> None:
        """Replace the sequence, rewind to 0, and (by default) start playing."""
        self._steps   = list(steps)
        self._cursor  = 0
        self._paused  = False
        self._playing = autoplay and bool(self._steps)
        self._rearm_timer()
        self._notify()

    def clear(self) -> None:
        """Back to IDLE: drops the sequence and stops the timer."""
        self._steps   = []
        self._cursor  = 0
        self._playing = False
        self._paused  = False
        self._rearm_timer()
        self._notify()

    def reset(self) -> None:
        """Cursor to 0 and stop, keeping the sequence."""
        moved = self._cursor != 0
        self._cursor  = 0
        self._playing = False
        self._paused  = False
        self._rearm_timer()
        if moved:
            self._notify()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step.  At the end, stops playback instead of wrapping."""
        if self._cursor < len(self._steps) - 1:
            self._cursor += 1
            self._notify()
            return True
        if self._playing:
            logger.debug("end of sequence reached, pausing")
            self._playing = False
            self._paused  = False
            self._rearm_timer()
        return False

    def step_backward(self) -> bool:
        if self._cursor <= 0:
            return False
        self._cursor -= 1
        self._notify()
        return True

    def goto(self, index: int) -> bool:
        """Jump to an arbitrary index.  Out-of-range indexes are ignored."""
        if not 0 <= index < len(self._steps):
            return False
        if index != self._cursor:
            self._cursor = index
            self._notify()
        return True

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if not self._steps or self._playing:
            return
        self._playing = True
        self._paused  = False
        self._rearm_timer()

    def pause(self) -> None:
        if not self._playing:
            return
        self._playing = False
        self._paused  = True
        self._rearm_timer()

    def toggle_play(self) -> None:
        if self._playing:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, level: int) -> None:
        self._speed = clamp_speed(level)
        if self._playing:
            self._rearm_timer()

    # ------------------------------------------------------------------
    # Tick (polled timers; call from the event loop or request handler)
    # ------------------------------------------------------------------
    def tick(self) -> int:
        """Fire any ticks the timer has due.  Returns how many fired."""
        return self._timer.poll()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> StepperState:
        if not self._steps:
            return StepperState.IDLE
        if self._playing:
            return StepperState.PLAYING
        if self._paused:
            return StepperState.PAUSED
        return StepperState.READY

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self._cursor < len(self._steps):
            return self._steps[self._cursor]
        return None

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def speed(self) -> int:
        return self._speed

    @property
    def interval_ms(self) -> float:
        return interval_for(self._speed)

    @property
    def timer_active(self) -> bool:
        return self._timer.active

    # advisory: the engine does not refuse these calls at a boundary
    @property
    def can_step_forward(self) -> bool:
        return self._cursor < len(self._steps) - 1

    @property
    def can_step_backward(self) -> bool:
        return bool(self._steps) and self._cursor > 0

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state":           self.state.value,
            "isPlaying":       self._playing,
            "speed":           self._speed,
            "intervalMs":      self.interval_ms,
            "cursor":          self._cursor,
            "totalSteps":      len(self._steps),
            "canStepForward":  self.can_step_forward,
            "canStepBackward": self.can_step_backward,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _rearm_timer(self) -> None:
        self._timer.cancel()
        if self._playing and self._steps:
            self._timer.start(self.interval_ms, self._on_tick)

    def _on_tick(self) -> None:
        self.step_forward()

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self.current_step)
