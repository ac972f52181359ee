from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..checkins.model import CheckInEvent
from .model import LogEntry


class LogRepository(Protocol):
    """Historical log entries: create one, list all, replace a whole entry's events."""

    def create(self, entry: LogEntry) -> None:
        raise NotImplementedError

    def list_all(self) -> Sequence[LogEntry]:
        raise NotImplementedError

    def get_by_id(self, log_id: str) -> Optional[LogEntry]:
        raise NotImplementedError

    def replace_events(self, log_id: str, *, events: Sequence[CheckInEvent], last_edited_at: datetime) -> bool:
        """Overwrite the full event list in a single write. No partial updates."""

        raise NotImplementedError
