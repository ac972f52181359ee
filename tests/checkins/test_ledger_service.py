from datetime import datetime

import pytest

from src.gym_checkin.gym_checkin.core.enums import ActivityType
from src.gym_checkin.gym_checkin.core.exceptions import PersistenceError, ValidationError


def test_check_in_denormalizes_name_and_stamps_time(container, fixed_now):
    event = container.ledger_service.check_in("a1", ActivityType.TEAM, "Sparkle Squad", now=fixed_now)

    assert event.athlete_name == "Alice"
    assert event.timestamp == fixed_now
    assert event.event_id
    assert container.ledger_service.list() == [event]


def test_duplicate_check_ins_are_all_kept(container):
    svc = container.ledger_service
    first = svc.check_in("a1", ActivityType.TEAM, "Sparkle Squad", now=datetime(2026, 2, 1, 9, 0))
    second = svc.check_in("a1", ActivityType.TEAM, "Sparkle Squad", now=datetime(2026, 2, 1, 9, 5))

    assert first.event_id != second.event_id
    assert len(svc.list()) == 2


@pytest.mark.parametrize(
    "athlete_id, activity_type, activity_name",
    [
        ("zz", ActivityType.TEAM, "Sparkle Squad"),
        ("p1", ActivityType.TEAM, "Sparkle Squad"),
        ("a1", ActivityType.TEAM, "Power Pumas"),
        ("a1", ActivityType.CLASS, ""),
    ],
)
def test_check_in_rejects_unknown_unapproved_or_unassigned(container, athlete_id, activity_type, activity_name):
    with pytest.raises(ValidationError):
        container.ledger_service.check_in(athlete_id, activity_type, activity_name)


def test_subscribers_get_pushed_on_change(container):
    seen = []
    unsubscribe = container.ledger_service.subscribe(lambda events: seen.append(len(events)))

    container.ledger_service.check_in("a1", ActivityType.TEAM, "Sparkle Squad")
    unsubscribe()
    container.ledger_service.check_in("b1", ActivityType.TEAM, "Sparkle Squad")

    assert seen == [0, 1]


def test_broken_subscriber_does_not_undo_check_in(container):
    def broken(_):
        raise RuntimeError("ui crashed")

    container.ledger_service.subscribe(broken)

    container.ledger_service.check_in("a1", ActivityType.TEAM, "Sparkle Squad")
    assert len(container.ledger_service.list()) == 1


def test_delete_many_removes_only_given_ids(container):
    svc = container.ledger_service
    keep = svc.check_in("a1", ActivityType.TEAM, "Sparkle Squad")
    drop = svc.check_in("b1", ActivityType.TEAM, "Power Pumas")

    svc.delete_many([drop.event_id])

    assert svc.list() == [keep]


def test_athletes_for_lists_approved_assigned_sorted(container):
    names = [a.name for a in container.ledger_service.athletes_for(ActivityType.TEAM, "Sparkle Squad")]

    assert names == ["Alice", "bob"]


def test_roster_status_reports_latest_check_in(container):
    svc = container.ledger_service
    svc.check_in("b1", ActivityType.TEAM, "Sparkle Squad", now=datetime(2026, 2, 1, 9, 0))
    svc.check_in("b1", ActivityType.TEAM, "Sparkle Squad", now=datetime(2026, 2, 1, 10, 0))
    svc.check_in("b1", ActivityType.TEAM, "Power Pumas", now=datetime(2026, 2, 1, 11, 0))

    rows = svc.roster_status(ActivityType.TEAM, "Sparkle Squad")

    assert [(r.athlete_name, r.checked_in, r.check_in_count) for r in rows] == [("Alice", False, 0), ("bob", True, 2)]
    assert rows[1].last_check_in == datetime(2026, 2, 1, 10, 0)
    assert rows[0].last_check_in is None


def test_failed_reload_does_not_fail_committed_check_in(container, ledger_repo, monkeypatch):
    seen = []
    container.ledger_service.subscribe(seen.append)
    stored = ledger_repo._events

    def unavailable():
        raise PersistenceError("ledger read failed")

    monkeypatch.setattr(ledger_repo, "list_all", unavailable)
    event = container.ledger_service.check_in("a1", ActivityType.TEAM, "Sparkle Squad")

    assert list(stored) == [event.event_id]
    assert seen == [[]]
