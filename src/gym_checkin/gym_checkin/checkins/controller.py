from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail, iso, json_body, ok
from ..container import Container
from ..roster.controller import athlete_json
from .model import CheckInEvent, RosterStatusRow
from .service import parse_activity_type


def event_json(e: CheckInEvent) -> dict:
    return {
        "event_id": e.event_id,
        "athlete_id": e.athlete_id,
        "athlete_name": e.athlete_name,
        "activity_type": e.activity_type.value,
        "activity_name": e.activity_name,
        "timestamp": iso(e.timestamp),
    }


def status_json(r: RosterStatusRow) -> dict:
    return {
        "athlete_id": r.athlete_id,
        "athlete_name": r.athlete_name,
        "status": "Checked In" if r.checked_in else "Not Checked In",
        "last_check_in": iso(r.last_check_in),
        "check_in_count": r.check_in_count,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/athletes", methods=["GET"], endpoint="api_athletes")
    def api_athletes():
        """Kiosk list: approved athletes of one team/class."""
        try:
            activity_type = parse_activity_type(request.args.get("type"))
            athletes = container.ledger_service.athletes_for(activity_type, request.args.get("name", ""))
            return ok({"athletes": [athlete_json(a) for a in athletes]})
        except Exception as e:
            return fail(e)

    @app.route("/api/checkins", methods=["GET"], endpoint="api_checkins")
    def api_checkins():
        try:
            return ok({"checkins": [event_json(e) for e in container.ledger_service.list()]})
        except Exception as e:
            return fail(e)

    @app.route("/api/checkins", methods=["POST"], endpoint="api_checkin_create")
    def api_checkin_create():
        data = json_body()
        try:
            event = container.ledger_service.check_in(
                data.get("athlete_id", ""),
                parse_activity_type(data.get("activity_type")),
                data.get("activity_name", ""),
            )
            return ok({"checkin": event_json(event), "message": f"{event.athlete_name} Checked In!"}, 201)
        except Exception as e:
            return fail(e)

    @app.route("/api/roster-status", methods=["GET"], endpoint="api_roster_status")
    def api_roster_status():
        try:
            activity_type = parse_activity_type(request.args.get("type"))
            rows = container.ledger_service.roster_status(activity_type, request.args.get("name", ""))
            return ok({"rows": [status_json(r) for r in rows]})
        except Exception as e:
            return fail(e)
