from __future__ import annotations

import threading
from typing import Any, Callable

from ..core.enums import GestureState
from .state_machine import HoldToConfirm


class HoldRegistry:
    """One hold-to-confirm machine per on-screen target (check-in button, reset control)."""

    def __init__(self):
        self._holds: dict[str, HoldToConfirm] = {}
        self._lock = threading.Lock()

    def get(self, key: str, *, threshold: int, action: Callable[[], Any]) -> HoldToConfirm:
        with self._lock:
            hold = self._holds.get(key)
            if hold is None:
                hold = HoldToConfirm(threshold, action, name=key)
                self._holds[key] = hold
            return hold

    def discard_if_idle(self, key: str) -> None:
        """Forget a machine that is not being held; the next press creates a fresh one."""

        with self._lock:
            hold = self._holds.get(key)
            if hold is not None and hold.state == GestureState.IDLE:
                del self._holds[key]

    def __contains__(self, key: str) -> bool:
        return key in self._holds

    def __len__(self) -> int:
        return len(self._holds)
