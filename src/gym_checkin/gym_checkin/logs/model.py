from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..checkins.model import CheckInEvent
from ..core.constants import ALL
from ..core.enums import ActivityType, CategoryFilter, CheckInStatus, StatusFilter


@dataclass(frozen=True)
class LogEntry:
    """Historical snapshot of one closed day, produced by a reset."""

    log_id: str
    created_at: datetime
    created_by_actor: str
    events: tuple[CheckInEvent, ...]
    last_edited_at: Optional[datetime] = None


@dataclass(frozen=True)
class ReconciliationFilter:
    name_substring: str = ""
    status: StatusFilter = StatusFilter.ALL
    category: CategoryFilter = CategoryFilter.ALL
    entity: str = ALL

    def includes_type(self, activity_type: ActivityType) -> bool:
        return self.category == CategoryFilter.ALL or self.category.value == activity_type.value

    def allows(self, status: CheckInStatus) -> bool:
        return self.status == StatusFilter.ALL or self.status.value == status.value


@dataclass(frozen=True)
class ReconciliationRow:
    athlete_id: str
    athlete_name: str
    activity_type: ActivityType
    activity_name: str
    status: CheckInStatus
    timestamp: Optional[datetime] = None

    def key(self) -> tuple[str, ActivityType, str]:
        return (self.athlete_id, self.activity_type, self.activity_name)


@dataclass(frozen=True)
class LogReport:
    entry: LogEntry
    rows: tuple[ReconciliationRow, ...]
