from __future__ import annotations

from flask import Flask

from ..checkins.controller import event_json
from ..checkins.service import parse_activity_type
from ..common.responses import fail, iso, json_body, ok
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import ValidationError
from .registry import HoldRegistry
from .state_machine import HoldToConfirm

ACTIONS = ("start", "tick", "release")


def _step(holds: HoldRegistry, key: str, hold: HoldToConfirm, action: str, serialize):
    try:
        return _apply(hold, action, serialize)
    finally:
        # Idle machines are dropped so the registry only holds live presses.
        holds.discard_if_idle(key)


def _apply(hold: HoldToConfirm, action: str, serialize):
    if action == "start":
        hold.start()
    elif action == "release":
        hold.release()
    else:
        outcome = hold.tick()
        if outcome.error is not None:
            return fail(outcome.error)
        payload = {"state": outcome.state.value, "progress": outcome.progress, "committed": outcome.committed}
        if outcome.committed:
            payload["result"] = serialize(outcome.result)
        return ok(payload)

    return ok({"state": hold.state.value, "progress": hold.progress, "remaining": hold.remaining, "committed": False})


def register(app: Flask, container: Container) -> None:
    @app.route("/api/holds/checkin/<action>", methods=["POST"], endpoint="api_hold_checkin")
    def api_hold_checkin(action: str):
        data = json_body()
        try:
            if action not in ACTIONS:
                raise ValidationError(f"Unknown gesture action: {action}")
            athlete_id = require_non_empty(data.get("athlete_id", ""), "Athlete")
            activity_type = parse_activity_type(data.get("activity_type"))
            activity_name = require_non_empty(data.get("activity_name", ""), "Team/class")

            key = f"checkin:{athlete_id}:{activity_type.value}:{activity_name}"
            hold = container.holds.get(
                key,
                threshold=container.check_in_hold_seconds,
                action=lambda: container.ledger_service.check_in(athlete_id, activity_type, activity_name),
            )
            return _step(container.holds, key, hold, action, event_json)
        except Exception as e:
            return fail(e)

    @app.route("/api/holds/reset/<action>", methods=["POST"], endpoint="api_hold_reset")
    def api_hold_reset(action: str):
        data = json_body()
        try:
            if action not in ACTIONS:
                raise ValidationError(f"Unknown gesture action: {action}")
            actor = require_non_empty(data.get("actor", ""), "Actor")

            key = f"reset:{actor}"
            hold = container.holds.get(
                key,
                threshold=container.reset_hold_seconds,
                action=lambda: container.archival_service.reset(actor),
            )
            return _step(
                container.holds,
                key,
                hold,
                action,
                lambda entry: {"log_id": entry.log_id, "created_at": iso(entry.created_at), "archived": len(entry.events)},
            )
        except Exception as e:
            return fail(e)
