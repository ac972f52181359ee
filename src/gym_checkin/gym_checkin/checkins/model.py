from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ActivityType


@dataclass(frozen=True)
class CheckInEvent:
    """One kiosk check-in. Never edited in place while it sits in the ledger."""

    event_id: str
    athlete_id: str
    athlete_name: str
    activity_type: ActivityType
    activity_name: str
    timestamp: Optional[datetime]

    def key(self) -> tuple[str, ActivityType, str]:
        return (self.athlete_id, self.activity_type, self.activity_name)

    def to_document(self) -> dict:
        return {
            "event_id": self.event_id,
            "athlete_id": self.athlete_id,
            "athlete_name": self.athlete_name,
            "activity_type": self.activity_type.value,
            "activity_name": self.activity_name,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "CheckInEvent":
        ts = doc.get("timestamp")
        return cls(
            event_id=str(doc.get("event_id") or ""),
            athlete_id=str(doc["athlete_id"]),
            athlete_name=doc.get("athlete_name") or "",
            activity_type=ActivityType(doc["activity_type"]),
            activity_name=doc["activity_name"],
            timestamp=datetime.fromisoformat(ts) if ts else None,
        )


@dataclass(frozen=True)
class RosterStatusRow:
    """Read-model for the coach's "today" overview of one team or class."""

    athlete_id: str
    athlete_name: str
    checked_in: bool
    last_check_in: Optional[datetime]
    check_in_count: int
