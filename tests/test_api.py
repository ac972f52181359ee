from __future__ import annotations

import pytest

from src.gym_checkin.gym_checkin.main import create_app

CHECKIN = {"athlete_id": "a1", "activity_type": "team", "activity_name": "Sparkle Squad"}


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def test_kiosk_lists_athletes_for_activity(client):
    res = client.get("/api/athletes", query_string={"type": "team", "name": "Sparkle Squad"})

    assert res.status_code == 200
    assert [a["name"] for a in res.get_json()["athletes"]] == ["Alice", "bob"]


def test_bad_activity_type_is_validation_error(client):
    res = client.get("/api/athletes", query_string={"type": "club", "name": "x"})

    assert res.status_code == 400
    assert res.get_json()["error"] == "validation"


def test_direct_check_in_and_roster_status(client):
    res = client.post("/api/checkins", json=CHECKIN)
    assert res.status_code == 201
    assert res.get_json()["message"] == "Alice Checked In!"

    res = client.get("/api/roster-status", query_string={"type": "team", "name": "Sparkle Squad"})
    statuses = {r["athlete_name"]: r["status"] for r in res.get_json()["rows"]}
    assert statuses == {"Alice": "Checked In", "bob": "Not Checked In"}


def test_check_in_hold_commits_after_two_ticks(client):
    assert client.post("/api/holds/checkin/start", json=CHECKIN).get_json()["state"] == "HOLDING"

    first = client.post("/api/holds/checkin/tick", json=CHECKIN).get_json()
    assert first["committed"] is False
    assert first["progress"] == 1

    second = client.post("/api/holds/checkin/tick", json=CHECKIN).get_json()
    assert second["committed"] is True
    assert second["result"]["athlete_name"] == "Alice"

    assert len(client.get("/api/checkins").get_json()["checkins"]) == 1


def test_released_hold_checks_nobody_in(client):
    client.post("/api/holds/checkin/start", json=CHECKIN)
    client.post("/api/holds/checkin/tick", json=CHECKIN)
    res = client.post("/api/holds/checkin/release", json=CHECKIN).get_json()

    assert res["progress"] == 0
    assert client.get("/api/checkins").get_json()["checkins"] == []


def test_reset_hold_needs_five_ticks(client):
    client.post("/api/checkins", json=CHECKIN)
    body = {"actor": "coach-1"}
    client.post("/api/holds/reset/start", json=body)
    for _ in range(4):
        assert client.post("/api/holds/reset/tick", json=body).get_json()["committed"] is False

    done = client.post("/api/holds/reset/tick", json=body).get_json()

    assert done["committed"] is True
    assert done["result"]["archived"] == 1
    assert client.get("/api/checkins").get_json()["checkins"] == []


def test_reset_surfaces_persistence_error(client, logs_repo):
    logs_repo.fail_create = True

    res = client.post("/api/reset", json={"actor": "coach-1"})

    assert res.status_code == 503
    assert res.get_json()["error"] == "persistence"


def test_history_filters_and_csv(client):
    client.post("/api/checkins", json=CHECKIN)
    client.post("/api/reset", json={"actor": "coach-1"})

    res = client.get("/api/logs", query_string={"status": "Checked In"})
    logs = res.get_json()["logs"]
    assert len(logs) == 1
    assert [(r["athlete_name"], r["status"]) for r in logs[0]["rows"]] == [("Alice", "Checked In")]

    res = client.get("/api/logs", query_string={"status": "Sometimes"})
    assert res.status_code == 400

    csv_res = client.get("/api/logs.csv", query_string={"status": "Missed"})
    assert csv_res.mimetype == "text/csv"
    text = csv_res.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith("log_id,log_created_at,athlete_id")
    assert "Carmen" in text


def test_log_correction_requires_passcode(client):
    client.post("/api/reset", json={"actor": "coach-1"})
    log_id = client.get("/api/logs").get_json()["logs"][0]["log_id"]
    ops = [{"op": "append", "athlete_id": "b1", "activity_type": "team", "activity_name": "Power Pumas",
            "timestamp": "2026-02-01T10:00"}]

    denied = client.put(f"/api/logs/{log_id}", json={"passcode": "nope", "operations": ops})
    assert denied.status_code == 403

    saved = client.put(f"/api/logs/{log_id}", json={"passcode": "cheer123", "operations": ops})
    assert saved.status_code == 200
    body = saved.get_json()["log"]
    assert [e["athlete_id"] for e in body["events"]] == ["b1"]
    assert body["last_edited_at"] is not None


def test_approve_athlete_via_api(client, roster_repo):
    assert client.post("/api/athletes/p1/approve", json={"passcode": "x"}).status_code == 403
    assert client.post("/api/athletes/p1/approve", json={"passcode": "cheer123"}).status_code == 200
    assert roster_repo.get_by_id("p1").is_approved


def test_finished_holds_are_forgotten(client, container):
    for actor in ("coach-1", "coach-2", "coach-3"):
        client.post("/api/holds/reset/start", json={"actor": actor})
        client.post("/api/holds/reset/release", json={"actor": actor})

    client.post("/api/holds/checkin/start", json=CHECKIN)
    assert len(container.holds) == 1

    client.post("/api/holds/checkin/tick", json=CHECKIN)
    client.post("/api/holds/checkin/tick", json=CHECKIN)

    assert len(container.holds) == 0
