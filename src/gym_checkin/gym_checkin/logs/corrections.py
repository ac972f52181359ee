from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Sequence

from ..checkins.model import CheckInEvent
from ..common.datetime_utils import now_local, parse_datetime_local
from ..common.validators import require_non_empty
from ..core.enums import ActivityType
from ..core.exceptions import ValidationError
from ..roster.model import Athlete
from .model import LogEntry
from .repository import LogRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("athlete_name", "timestamp")


class CorrectionEditor:
    """Working copy of one log entry's events.

    Nothing touches the stored entry until ``save()``, which writes the whole
    event list at once.
    """

    def __init__(
        self,
        entry: LogEntry,
        logs: LogRepository,
        *,
        roster: Iterable[Athlete],
        teams: Sequence[str],
        classes: Sequence[str],
        on_saved: Callable[[], None] | None = None,
    ):
        self._entry = entry
        self._logs = logs
        self._athletes = {a.athlete_id: a for a in roster}
        self._names = {ActivityType.TEAM: tuple(teams), ActivityType.CLASS: tuple(classes)}
        self._on_saved = on_saved
        self._events: list[CheckInEvent] = list(entry.events)

    @property
    def entry(self) -> LogEntry:
        return self._entry

    @property
    def events(self) -> tuple[CheckInEvent, ...]:
        return tuple(self._events)

    def append(
        self,
        athlete_id: str,
        activity_type: ActivityType,
        activity_name: str,
        timestamp,
    ) -> CheckInEvent:
        athlete_id = require_non_empty(athlete_id, "Athlete")
        activity_name = require_non_empty(activity_name, "Team/class")
        try:
            activity_type = ActivityType(activity_type)
        except ValueError:
            raise ValidationError("Type must be 'team' or 'class'")
        parsed = parse_datetime_local(timestamp)
        if parsed is None:
            raise ValidationError("Check-in time is required")

        athlete = self._athletes.get(athlete_id)
        if not athlete:
            raise ValidationError("Selected athlete not found")
        if activity_name not in self._names[activity_type]:
            raise ValidationError(f"Unknown {activity_type.value}: {activity_name}")

        key = (athlete_id, activity_type, activity_name)
        if any(e.key() == key for e in self._events):
            raise ValidationError("duplicate activity: this athlete is already recorded for this team/class in this log")

        event = CheckInEvent(
            event_id=uuid.uuid4().hex,
            athlete_id=athlete_id,
            athlete_name=athlete.name,
            activity_type=activity_type,
            activity_name=activity_name,
            timestamp=parsed,
        )
        self._events.append(event)
        return event

    def remove(self, index: int) -> CheckInEvent:
        return self._events.pop(self._check_index(index))

    def edit(self, index: int, field: str, value) -> CheckInEvent:
        index = self._check_index(index)
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Field {field!r} cannot be edited")

        if field == "timestamp":
            value = parse_datetime_local(value)
        else:
            value = "" if value is None else str(value)

        updated = replace(self._events[index], **{field: value})
        self._events[index] = updated
        return updated

    def save(self, *, now: datetime | None = None) -> LogEntry:
        edited_at = now or now_local()
        events = tuple(self._events)
        if not self._logs.replace_events(self._entry.log_id, events=events, last_edited_at=edited_at):
            raise ValidationError("Log entry no longer exists")

        self._entry = replace(self._entry, events=events, last_edited_at=edited_at)
        logger.info("Log %s saved with %d check-ins", self._entry.log_id, len(events))
        if self._on_saved:
            self._on_saved()
        return self._entry

    def _check_index(self, index) -> int:
        try:
            i = int(index)
        except (TypeError, ValueError):
            raise ValidationError("Invalid row")
        if i < 0 or i >= len(self._events):
            raise ValidationError("Invalid row")
        return i
