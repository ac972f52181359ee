"""Expected-vs-actual attendance for a closed day.

Each approved athlete is expected at every team and class they are assigned to.
A log entry's events say who actually checked in. Every expected activity becomes
one row, either Checked In (with the check-in time) or Missed.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from ..checkins.model import CheckInEvent
from ..core.constants import ALL
from ..core.enums import ActivityType, CheckInStatus
from ..roster.model import Athlete
from .model import LogEntry, LogReport, ReconciliationFilter, ReconciliationRow


def _expected_activities(athlete: Athlete, flt: ReconciliationFilter) -> list[tuple[ActivityType, str]]:
    expected = []
    for activity_type in (ActivityType.TEAM, ActivityType.CLASS):
        if not flt.includes_type(activity_type):
            continue
        names = sorted(athlete.assignments(activity_type))
        if flt.entity != ALL:
            names = [n for n in names if n == flt.entity]
        expected.extend((activity_type, n) for n in names)
    return expected


def _sort_key(row: ReconciliationRow):
    return (
        row.status != CheckInStatus.CHECKED_IN,
        (row.athlete_name or "").lower(),
        row.timestamp or datetime.min,
    )


def reconcile(
    roster: Iterable[Athlete],
    events: Sequence[CheckInEvent],
    flt: ReconciliationFilter | None = None,
) -> list[ReconciliationRow]:
    """Rows for one log entry. Same inputs always give the same ordered rows."""

    flt = flt or ReconciliationFilter()
    needle = (flt.name_substring or "").lower()

    # First event per key wins the timestamp.
    first_event: dict[tuple, CheckInEvent] = {}
    for event in events:
        first_event.setdefault(event.key(), event)

    rows: list[ReconciliationRow] = []
    for athlete in roster:
        if not athlete.is_approved:
            continue
        if needle not in (athlete.name or "").lower():
            continue

        for activity_type, activity_name in _expected_activities(athlete, flt):
            key = (athlete.athlete_id, activity_type, activity_name)
            event = first_event.get(key)

            if event is not None:
                if flt.allows(CheckInStatus.CHECKED_IN):
                    rows.append(
                        ReconciliationRow(
                            athlete_id=athlete.athlete_id,
                            athlete_name=athlete.name,
                            activity_type=activity_type,
                            activity_name=activity_name,
                            status=CheckInStatus.CHECKED_IN,
                            timestamp=event.timestamp,
                        )
                    )
            elif flt.allows(CheckInStatus.MISSED):
                already_checked_in = any(
                    r.key() == key and r.status == CheckInStatus.CHECKED_IN for r in rows
                )
                if not already_checked_in:
                    rows.append(
                        ReconciliationRow(
                            athlete_id=athlete.athlete_id,
                            athlete_name=athlete.name,
                            activity_type=activity_type,
                            activity_name=activity_name,
                            status=CheckInStatus.MISSED,
                        )
                    )

    unique: dict[tuple, ReconciliationRow] = {}
    for row in rows:
        unique[(*row.key(), row.status)] = row

    return sorted(unique.values(), key=_sort_key)


def build_report(
    roster: Iterable[Athlete],
    entries: Iterable[LogEntry],
    flt: ReconciliationFilter | None = None,
) -> list[LogReport]:
    """Reconcile every entry (most recent first), dropping entries with no rows left."""

    roster = list(roster)
    report = []
    for entry in sorted(entries, key=lambda e: e.created_at, reverse=True):
        rows = reconcile(roster, entry.events, flt)
        if rows:
            report.append(LogReport(entry=entry, rows=tuple(rows)))
    return report
