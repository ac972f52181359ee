from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol, Sequence

from ..core.enums import ActivityType
from .model import CheckInEvent


class LedgerRepository(Protocol):
    """Today's open check-ins: create one, list all, delete many by id."""

    def create(
        self,
        *,
        athlete_id: str,
        athlete_name: str,
        activity_type: ActivityType,
        activity_name: str,
        timestamp: datetime,
    ) -> CheckInEvent:
        raise NotImplementedError

    def list_all(self) -> Sequence[CheckInEvent]:
        raise NotImplementedError

    def delete_many(self, event_ids: Iterable[str]) -> int:
        raise NotImplementedError
