"""
session.py — Selection & Session State
========================================
A Session is one user's visualizer: which algorithm is selected, the
pending operation value, the Stepper playing the current sequence, and
the notifications produced along the way.  Sessions are in-memory only
and independent of each other.

Every backend failure is caught here, logged, stored in `last_error`
and turned into a Notification.  Nothing propagates to the caller.

Supersession:
  operate() and select() bump a generation counter.  A backend result
  that comes back under an older generation is dropped, so a slow first
  request can never overwrite a newer sequence.
"""

import logging
import random
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from algorithms import AlgoInfo, Operation, get_algorithm
from config import Settings, settings as default_settings
from engine.backend import LocalBackend
from engine.errors import AlgoVizError, GenerationFailure, InvalidSelection
from engine.stepper import Stepper
from engine.timer import PlaybackTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level:   str    # "info" | "error"
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"level": self.level, "message": self.message}


class Session:
    """
    Attributes:
        session_id      : Key in the SessionStore.
        algorithm       : Selected AlgoInfo, or None.
        operation_value : Input for the next operate(); sticky across select().
        stepper         : Playback engine for the current sequence.
        notifications   : User-visible messages, newest last.
        last_error      : The most recent reported error (None after a success).
        lock            : threading.Lock for callers that share the session across threads.
    """

    def __init__(
        self,
        backend=None,
        timer: Optional[PlaybackTimer] = None,
        settings: Settings = default_settings,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.settings = settings
        if backend is None:
            seed = settings.sorting_seed
            backend = LocalBackend(rng=random.Random(seed) if seed is not None else None)
        self.backend = backend

        self.algorithm:       Optional[AlgoInfo]        = None
        self.operation_value: int                       = self._clamp_value(settings.default_operation_value)
        self.stepper:         Stepper                   = Stepper(timer=timer, speed=settings.default_speed)
        self.notifications:   List[Notification]        = []
        self.last_error:      Optional[AlgoVizError]    = None
        self._generation = 0
        self.lock = threading.Lock()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select(self, key: str) -> bool:
        info = get_algorithm(key)
        if info is None:
            self._report(InvalidSelection(f"Unknown algorithm: {key}"))
            return False

        self._generation += 1
        self.algorithm = info
        self.stepper.clear()
        logger.info("session %s selected %s", self.session_id, key)
        return True

    def set_operation_value(self, value: Union[int, float, str]) -> int:
        self.operation_value = self._clamp_value(int(value))
        return self.operation_value

    def _clamp_value(self, value: int) -> int:
        return max(self.settings.min_operation_value, min(self.settings.max_operation_value, value))

    # ------------------------------------------------------------------
    # Operate
    # ------------------------------------------------------------------
    async def operate(
        self,
        operation: Union[Operation, str],
        value: Optional[Union[int, float, str]] = None,
    ) -> bool:
        """
        Ask the backend for a new sequence and start playing it.
        Returns True if the new sequence was loaded.  On any failure the
        previous sequence and cursor are left as they were.
        """
        if self.algorithm is None:
            self._report(InvalidSelection("Select an algorithm before running an operation"))
            return False

        if not isinstance(operation, Operation):
            try:
                operation = Operation.parse(operation)
            except ValueError:
                self._report(GenerationFailure(f"Unknown operation: {operation}"))
                return False

        if value is not None:
            try:
                self.set_operation_value(value)
            except (TypeError, ValueError, OverflowError):
                self._report(GenerationFailure(f"Invalid operation value: {value!r}"))
                return False

        self._generation += 1
        ticket = self._generation
        info = self.algorithm
        value = self.operation_value

        try:
            steps = await self.backend.perform_operation(info, operation, value)
        except AlgoVizError as e:
            if ticket != self._generation:
                logger.debug("ignoring failure of superseded request %d: %s", ticket, e)
                return False
            logger.warning("%s %s(%s) failed: %s", info.key, operation.value, value, e)
            self._report(e)
            return False
        except Exception as e:
            if ticket != self._generation:
                return False
            logger.exception("%s %s(%s) crashed", info.key, operation.value, value)
            self._report(GenerationFailure(str(e) or type(e).__name__))
            return False

        if ticket != self._generation:
            logger.debug("discarding stale result of request %d (current %d)", ticket, self._generation)
            return False

        self.stepper.load(steps, autoplay=True)
        self.last_error = None
        logger.info("session %s loaded %d steps for %s %s(%s)",
                    self.session_id, len(steps), info.key, operation.value, value)
        return True

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    def describe(self) -> Optional[Dict[str, Any]]:
        return self.algorithm.to_dict() if self.algorithm else None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "algorithm":      self.describe(),
            "operationValue": self.operation_value,
            "playback":       self.stepper.snapshot(),
        }

    def drain_notifications(self) -> List[Notification]:
        out, self.notifications = self.notifications, []
        return out

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _report(self, error: AlgoVizError) -> None:
        self.last_error = error
        self.notifications.append(Notification("error", str(error)))


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------
class SessionStore:
    """In-memory sessions keyed by id.  Lost on restart."""

    def __init__(self, factory=Session):
        self._factory = factory
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if session_id is None:
            return None
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: Optional[str] = None) -> Session:
        with self._lock:
            existing = self.get(session_id)
            if existing is not None:
                return existing
            created = self._factory(session_id=session_id) if session_id else self._factory()
            self._sessions[created.session_id] = created
            return created

    def remove(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self):
        return iter(list(self._sessions.values()))
