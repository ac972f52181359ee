from datetime import datetime

from src.gym_checkin.gym_checkin.checkins.model import CheckInEvent
from src.gym_checkin.gym_checkin.core.enums import ActivityType, CategoryFilter, CheckInStatus, StatusFilter
from src.gym_checkin.gym_checkin.logs.model import LogEntry, ReconciliationFilter
from src.gym_checkin.gym_checkin.logs.reconciliation import build_report, reconcile
from src.gym_checkin.gym_checkin.roster.model import Athlete

TEAM = ActivityType.TEAM
CLASS = ActivityType.CLASS


def ev(athlete_id, name, activity_type, activity_name, ts):
    return CheckInEvent(f"{athlete_id}-{activity_name}-{ts:%H%M}", athlete_id, name, activity_type, activity_name, ts)


def summary(rows):
    return [(r.athlete_name, r.activity_type.value, r.activity_name, r.status.value) for r in rows]


def test_all_filter_gives_one_row_per_expected_activity(athletes):
    events = [ev("a1", "Alice", TEAM, "Sparkle Squad", datetime(2026, 2, 1, 9, 0))]

    rows = reconcile(athletes, events)

    assert summary(rows) == [
        ("Alice", "team", "Sparkle Squad", "Checked In"),
        ("Alice", "class", "Tumble Basics", "Missed"),
        ("bob", "team", "Power Pumas", "Missed"),
        ("bob", "team", "Sparkle Squad", "Missed"),
        ("Carmen", "class", "Tumble Basics", "Missed"),
    ]
    keys = [(r.athlete_id, r.activity_type, r.activity_name) for r in rows]
    assert len(keys) == len(set(keys))


def test_unapproved_athletes_are_ignored(athletes):
    assert "Pending Pat" not in {r.athlete_name for r in reconcile(athletes, [])}


def test_checked_in_rows_carry_first_matching_timestamp(athletes):
    events = [
        ev("b1", "bob", TEAM, "Power Pumas", datetime(2026, 2, 1, 10, 0)),
        ev("b1", "bob", TEAM, "Power Pumas", datetime(2026, 2, 1, 8, 0)),
    ]

    rows = reconcile(athletes, events, ReconciliationFilter(status=StatusFilter.CHECKED_IN))

    assert len(rows) == 1
    assert rows[0].timestamp == datetime(2026, 2, 1, 10, 0)


def test_checked_in_sorted_by_name_then_time(athletes):
    events = [
        ev("c1", "Carmen", CLASS, "Tumble Basics", datetime(2026, 2, 1, 8, 0)),
        ev("a1", "Alice", CLASS, "Tumble Basics", datetime(2026, 2, 1, 11, 0)),
        ev("a1", "Alice", TEAM, "Sparkle Squad", datetime(2026, 2, 1, 9, 0)),
    ]

    rows = reconcile(athletes, events, ReconciliationFilter(status=StatusFilter.CHECKED_IN))

    assert [(r.athlete_name, r.activity_name) for r in rows] == [
        ("Alice", "Sparkle Squad"),
        ("Alice", "Tumble Basics"),
        ("Carmen", "Tumble Basics"),
    ]


def test_missed_filter_drops_attended_activities(athletes):
    events = [ev("a1", "Alice", TEAM, "Sparkle Squad", datetime(2026, 2, 1, 9, 0))]

    rows = reconcile(athletes, events, ReconciliationFilter(status=StatusFilter.MISSED, name_substring="ali"))

    assert summary(rows) == [("Alice", "class", "Tumble Basics", "Missed")]
    assert rows[0].timestamp is None


def test_name_filter_is_case_insensitive_substring(athletes):
    rows = reconcile(athletes, [], ReconciliationFilter(name_substring="BO"))

    assert {r.athlete_name for r in rows} == {"bob"}


def test_category_and_entity_filters(athletes):
    classes_only = reconcile(athletes, [], ReconciliationFilter(category=CategoryFilter.CLASS))
    assert {r.activity_type for r in classes_only} == {CLASS}

    one_team = reconcile(athletes, [], ReconciliationFilter(category=CategoryFilter.TEAM, entity="Power Pumas"))
    assert summary(one_team) == [("bob", "team", "Power Pumas", "Missed")]

    entity_any_type = reconcile(athletes, [], ReconciliationFilter(entity="Tumble Basics"))
    assert [r.athlete_name for r in entity_any_type] == ["Alice", "Carmen"]


def test_events_for_unassigned_activities_are_not_reported(athletes):
    events = [ev("c1", "Carmen", TEAM, "Victory Vipers", datetime(2026, 2, 1, 9, 0))]

    rows = reconcile(athletes, events, ReconciliationFilter(name_substring="carmen"))

    assert summary(rows) == [("Carmen", "class", "Tumble Basics", "Missed")]


def test_same_inputs_same_ordered_output(athletes):
    events = [
        ev("b1", "bob", TEAM, "Sparkle Squad", datetime(2026, 2, 1, 9, 0)),
        ev("a1", "Alice", CLASS, "Tumble Basics", datetime(2026, 2, 1, 9, 30)),
    ]
    flt = ReconciliationFilter()

    assert reconcile(athletes, events, flt) == reconcile(athletes, events, flt)


def test_build_report_skips_empty_entries_and_orders_newest_first(athletes):
    older = LogEntry("L1", datetime(2026, 1, 30, 18, 0), "coach", ())
    newer = LogEntry(
        "L2",
        datetime(2026, 1, 31, 18, 0),
        "coach",
        (ev("a1", "Alice", TEAM, "Sparkle Squad", datetime(2026, 1, 31, 9, 0)),),
    )

    report = build_report(athletes, [older, newer], ReconciliationFilter(status=StatusFilter.CHECKED_IN))
    assert [item.entry.log_id for item in report] == ["L2"]

    report = build_report(athletes, [older, newer])
    assert [item.entry.log_id for item in report] == ["L2", "L1"]
    assert report[1].rows[0].status == CheckInStatus.MISSED


def test_athlete_without_name_sorts_first():
    roster = [
        Athlete("a1", "alice", teams=frozenset({"Sparkle Squad"}), is_approved=True),
        Athlete("x1", None, teams=frozenset({"Sparkle Squad"}), is_approved=True),
    ]

    rows = reconcile(roster, [])

    assert [r.athlete_id for r in rows] == ["x1", "a1"]
