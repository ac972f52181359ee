from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..core.enums import GestureState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickOutcome:
    """What one tick did: current progress, whether the action fired, and its result."""

    state: GestureState
    progress: int
    committed: bool = False
    result: Any = None
    error: Optional[Exception] = None


class HoldToConfirm:
    """Hold-to-confirm gesture: the action fires only after ``threshold`` ticks of holding.

    Feed it ``start`` (press), ``tick`` (once per second while pressed) and
    ``release`` (lift, pointer leave or cancel). Releasing early never fires the
    action. A completed hold fires it exactly once and returns to idle.
    """

    def __init__(self, threshold: int, action: Callable[[], Any], *, name: str = "hold"):
        if int(threshold) < 1:
            raise ValueError("threshold must be >= 1")
        self._threshold = int(threshold)
        self._action = action
        self._name = name
        self._state = GestureState.IDLE
        self._progress = 0
        self._lock = threading.Lock()

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def threshold(self) -> int:
        return self._threshold

    @property
    def remaining(self) -> int:
        return self._threshold - self._progress

    def start(self) -> None:
        with self._lock:
            if self._state == GestureState.HOLDING:
                return
            self._state = GestureState.HOLDING
            self._progress = 0

    def tick(self) -> TickOutcome:
        with self._lock:
            if self._state != GestureState.HOLDING:
                return TickOutcome(state=self._state, progress=self._progress)

            self._progress += 1
            if self._progress < self._threshold:
                return TickOutcome(state=self._state, progress=self._progress)

            # Back to idle before firing so a concurrent tick cannot fire twice.
            self._state = GestureState.IDLE
            self._progress = 0

        # Outside the lock: the action may be slow and may tick other holds.
        try:
            result = self._action()
        except Exception as e:
            logger.warning("Hold action %s failed: %s", self._name, e)
            return TickOutcome(state=GestureState.IDLE, progress=0, committed=True, error=e)
        return TickOutcome(state=GestureState.IDLE, progress=0, committed=True, result=result)

    def release(self) -> None:
        with self._lock:
            self._state = GestureState.IDLE
            self._progress = 0
