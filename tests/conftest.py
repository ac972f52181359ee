from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime

import pytest

from src.gym_checkin.gym_checkin.checkins.model import CheckInEvent
from src.gym_checkin.gym_checkin.container import build_services
from src.gym_checkin.gym_checkin.core.exceptions import PersistenceError
from src.gym_checkin.gym_checkin.roster.model import Athlete


class InMemoryRoster:
    def __init__(self, athletes):
        self._by_id = {a.athlete_id: a for a in athletes}

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda a: a.name)

    def get_by_id(self, athlete_id):
        return self._by_id.get(athlete_id)

    def set_approved(self, athlete_id, *, is_approved):
        a = self._by_id.get(athlete_id)
        if not a:
            return False
        self._by_id[athlete_id] = replace(a, is_approved=is_approved)
        return True

    def update_assignments(self, athlete_id, *, teams, classes):
        a = self._by_id.get(athlete_id)
        if not a:
            return False
        self._by_id[athlete_id] = replace(a, teams=frozenset(teams), classes=frozenset(classes))
        return True


class InMemoryLedger:
    def __init__(self):
        self._events: dict[str, CheckInEvent] = {}
        self.fail_delete = False
        self.before_delete = None

    def create(self, *, athlete_id, athlete_name, activity_type, activity_name, timestamp):
        event = CheckInEvent(
            event_id=uuid.uuid4().hex,
            athlete_id=athlete_id,
            athlete_name=athlete_name,
            activity_type=activity_type,
            activity_name=activity_name,
            timestamp=timestamp,
        )
        self._events[event.event_id] = event
        return event

    def list_all(self):
        return list(self._events.values())

    def delete_many(self, event_ids):
        ids = list(event_ids)
        if self.before_delete:
            hook, self.before_delete = self.before_delete, None
            hook()
        if self.fail_delete:
            raise PersistenceError("ledger delete rejected")
        for event_id in ids:
            self._events.pop(event_id, None)
        return len(ids)


class InMemoryLogs:
    def __init__(self):
        self._entries = {}
        self.fail_create = False
        self.writes = 0

    def create(self, entry):
        if self.fail_create:
            raise PersistenceError("log write rejected")
        self._entries[entry.log_id] = entry
        self.writes += 1

    def list_all(self):
        return list(self._entries.values())

    def get_by_id(self, log_id):
        return self._entries.get(log_id)

    def replace_events(self, log_id, *, events, last_edited_at):
        entry = self._entries.get(log_id)
        if not entry:
            return False
        self._entries[log_id] = replace(entry, events=tuple(events), last_edited_at=last_edited_at)
        self.writes += 1
        return True


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 1, 17, 30, 0)


@pytest.fixture
def athletes():
    return [
        Athlete("a1", "Alice", teams=frozenset({"Sparkle Squad"}), classes=frozenset({"Tumble Basics"}), is_approved=True),
        Athlete("b1", "bob", teams=frozenset({"Sparkle Squad", "Power Pumas"}), is_approved=True),
        Athlete("c1", "Carmen", classes=frozenset({"Tumble Basics"}), is_approved=True),
        Athlete("p1", "Pending Pat", teams=frozenset({"Sparkle Squad"}), is_approved=False),
    ]


@pytest.fixture
def roster_repo(athletes):
    return InMemoryRoster(athletes)


@pytest.fixture
def ledger_repo():
    return InMemoryLedger()


@pytest.fixture
def logs_repo():
    return InMemoryLogs()


@pytest.fixture
def container(roster_repo, ledger_repo, logs_repo):
    return build_services(roster_repo=roster_repo, ledger_repo=ledger_repo, logs_repo=logs_repo)


@pytest.fixture
def make_container(ledger_repo, logs_repo):
    """Container over a custom roster; ledger/log fakes are the shared fixtures."""

    def _make(athletes, **kwargs):
        roster = InMemoryRoster(athletes)
        return roster, build_services(roster_repo=roster, ledger_repo=ledger_repo, logs_repo=logs_repo, **kwargs)

    return _make
