from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChangeFeed(Generic[T]):
    """Push-on-change subscription for one collection.

    ``loader`` returns the current snapshot; subscribers receive it once on
    subscription and again after every ``publish()``.
    """

    def __init__(self, name: str, loader: Callable[[], T]):
        self._name = name
        self._loader = loader
        self._callbacks: List[Callable[[T], None]] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[T], None], *, push_current: bool = True) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)

        if push_current:
            self._deliver(callback, self._loader())

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def publish(self) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        if not callbacks:
            return

        try:
            snapshot = self._loader()
        except Exception:
            # The write already committed; a failed reload only skips this push.
            logger.exception("Reloading %s feed failed, subscribers not notified", self._name)
            return
        for callback in callbacks:
            self._deliver(callback, snapshot)

    def _deliver(self, callback: Callable[[T], None], snapshot: T) -> None:
        try:
            callback(snapshot)
        except Exception:
            # A broken subscriber must not undo a committed write.
            logger.exception("Subscriber of %s feed failed", self._name)
