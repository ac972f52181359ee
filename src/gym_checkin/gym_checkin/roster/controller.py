from __future__ import annotations

from flask import Flask

from ..common.responses import fail, json_body, ok
from ..container import Container
from .model import Athlete


def athlete_json(a: Athlete) -> dict:
    return {
        "athlete_id": a.athlete_id,
        "name": a.name,
        "teams": sorted(a.teams),
        "classes": sorted(a.classes),
        "is_approved": a.is_approved,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/activities", methods=["GET"], endpoint="api_activities")
    def api_activities():
        svc = container.roster_service
        return ok({"teams": list(svc.teams), "classes": list(svc.classes)})

    @app.route("/api/athletes/<athlete_id>/approve", methods=["POST"], endpoint="api_athlete_approve")
    def api_athlete_approve(athlete_id: str):
        try:
            container.roster_service.approve(athlete_id, passcode=json_body().get("passcode"))
            return ok({"message": "Athlete approved"})
        except Exception as e:
            return fail(e)

    @app.route("/api/athletes/<athlete_id>/assignments", methods=["PUT"], endpoint="api_athlete_assignments")
    def api_athlete_assignments(athlete_id: str):
        data = json_body()
        try:
            container.roster_service.update_assignments(
                athlete_id,
                teams=data.get("teams") or [],
                classes=data.get("classes") or [],
                passcode=data.get("passcode"),
            )
            return ok({"athlete": athlete_json(container.roster_service.get(athlete_id))})
        except Exception as e:
            return fail(e)
