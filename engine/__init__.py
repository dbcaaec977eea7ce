"""
engine/
-------
Playback layer.

    from engine import Stepper, PolledTimer
    from engine.session import Session, SessionStore
    from engine.backend import LocalBackend, HttpBackend

session and backend are imported from their modules directly; they pull
in algorithms.generator, which itself depends on engine.errors.
"""

from engine.errors  import AlgoVizError, InvalidSelection, GenerationFailure, StructuralViolation
from engine.stepper import Stepper, StepperState, interval_for, MIN_SPEED, MAX_SPEED, DEFAULT_SPEED
from engine.timer   import PlaybackTimer, AsyncioTimer, PolledTimer

__all__ = [
    "AlgoVizError",
    "InvalidSelection",
    "GenerationFailure",
    "StructuralViolation",
    "Stepper",
    "StepperState",
    "interval_for",
    "MIN_SPEED",
    "MAX_SPEED",
    "DEFAULT_SPEED",
    "PlaybackTimer",
    "AsyncioTimer",
    "PolledTimer",
]
