from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Sequence

from ..common.datetime_utils import now_local
from ..common.feed import ChangeFeed
from ..common.validators import require_non_empty
from ..core.enums import ActivityType
from ..core.exceptions import ValidationError
from ..roster.model import Athlete
from ..roster.repository import RosterRepository
from .model import CheckInEvent, RosterStatusRow
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


def parse_activity_type(value) -> ActivityType:
    try:
        return ActivityType(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Activity type must be 'team' or 'class'")


class LedgerService:
    """Use case: kiosk check-ins into today's ledger and the coach's live view of it."""

    def __init__(self, ledger: LedgerRepository, roster: RosterRepository):
        self._ledger = ledger
        self._roster = roster
        self._feed: ChangeFeed[Sequence[CheckInEvent]] = ChangeFeed("ledger", self.list)

    def check_in(
        self,
        athlete_id: str,
        activity_type: ActivityType,
        activity_name: str,
        *,
        now: datetime | None = None,
    ) -> CheckInEvent:
        activity_name = require_non_empty(activity_name, "Team/class")
        athlete = self._roster.get_by_id(require_non_empty(athlete_id, "Athlete"))
        if not athlete or not athlete.is_approved:
            raise ValidationError("Athlete not found")
        if not athlete.is_assigned(activity_type, activity_name):
            raise ValidationError(f"{athlete.name} is not assigned to {activity_name}")

        # Same athlete may check into the same activity several times a day.
        event = self._ledger.create(
            athlete_id=athlete.athlete_id,
            athlete_name=athlete.name,
            activity_type=activity_type,
            activity_name=activity_name,
            timestamp=now or now_local(),
        )
        logger.info("%s checked in (%s: %s)", athlete.name, activity_type.value, activity_name)
        self._feed.publish()
        return event

    def list(self) -> list[CheckInEvent]:
        return list(self._ledger.list_all())

    def delete_many(self, event_ids: Iterable[str]) -> int:
        deleted = self._ledger.delete_many(list(event_ids))
        self._feed.publish()
        return deleted

    def subscribe(self, callback: Callable[[Sequence[CheckInEvent]], None]) -> Callable[[], None]:
        return self._feed.subscribe(callback)

    def athletes_for(self, activity_type: ActivityType, activity_name: str) -> list[Athlete]:
        """Approved athletes assigned to one team/class, as listed on the kiosk."""

        return sorted(
            (a for a in self._roster.list_all() if a.is_approved and a.is_assigned(activity_type, activity_name)),
            key=lambda a: a.name.lower(),
        )

    def roster_status(self, activity_type: ActivityType, activity_name: str) -> list[RosterStatusRow]:
        events = [
            e for e in self._ledger.list_all()
            if e.activity_type == activity_type and e.activity_name == activity_name
        ]

        rows = []
        for athlete in self.athletes_for(activity_type, activity_name):
            mine = [e.timestamp for e in events if e.athlete_id == athlete.athlete_id and e.timestamp]
            rows.append(
                RosterStatusRow(
                    athlete_id=athlete.athlete_id,
                    athlete_name=athlete.name,
                    checked_in=bool(mine),
                    last_check_in=max(mine) if mine else None,
                    check_in_count=len(mine),
                )
            )
        return rows
