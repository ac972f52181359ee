from __future__ import annotations

import csv
import io

from flask import Flask, request

from ..checkins.controller import event_json
from ..common.responses import fail, iso, json_body, ok
from ..common.validators import require_non_empty
from ..container import Container
from ..core.constants import ALL
from ..core.enums import CategoryFilter, StatusFilter
from ..core.exceptions import ValidationError
from .model import LogEntry, LogReport, ReconciliationFilter, ReconciliationRow


def _parse_filter(args) -> ReconciliationFilter:
    try:
        return ReconciliationFilter(
            name_substring=args.get("name", ""),
            status=StatusFilter(args.get("status") or StatusFilter.ALL.value),
            category=CategoryFilter(args.get("category") or CategoryFilter.ALL.value),
            entity=args.get("entity") or ALL,
        )
    except ValueError:
        raise ValidationError("Invalid filter")


def entry_json(entry: LogEntry) -> dict:
    return {
        "log_id": entry.log_id,
        "created_at": iso(entry.created_at),
        "created_by_actor": entry.created_by_actor,
        "last_edited_at": iso(entry.last_edited_at),
        "events": [event_json(e) for e in entry.events],
    }


def row_json(r: ReconciliationRow) -> dict:
    return {
        "athlete_id": r.athlete_id,
        "athlete_name": r.athlete_name,
        "activity_type": r.activity_type.value,
        "activity_name": r.activity_name,
        "status": r.status.value,
        "timestamp": iso(r.timestamp),
    }


def report_json(item: LogReport) -> dict:
    return {
        "log_id": item.entry.log_id,
        "created_at": iso(item.entry.created_at),
        "created_by_actor": item.entry.created_by_actor,
        "last_edited_at": iso(item.entry.last_edited_at),
        "rows": [row_json(r) for r in item.rows],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reset", methods=["POST"], endpoint="api_reset")
    def api_reset():
        try:
            actor = require_non_empty(json_body().get("actor", ""), "Actor")
            entry = container.archival_service.reset(actor)
            return ok({"log": entry_json(entry), "message": "All daily check-ins have been reset and logged."})
        except Exception as e:
            return fail(e)

    @app.route("/api/logs", methods=["GET"], endpoint="api_logs")
    def api_logs():
        try:
            report = container.log_service.report(_parse_filter(request.args))
            return ok({"logs": [report_json(item) for item in report]})
        except Exception as e:
            return fail(e)

    @app.route("/api/logs.csv", methods=["GET"], endpoint="api_logs_csv")
    def api_logs_csv():
        try:
            report = container.log_service.report(_parse_filter(request.args))
        except Exception as e:
            return fail(e)

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["log_id", "log_created_at", "athlete_id", "athlete_name", "activity_type", "activity_name", "status", "timestamp"],
        )
        writer.writeheader()
        for item in report:
            for r in item.rows:
                writer.writerow({"log_id": item.entry.log_id, "log_created_at": iso(item.entry.created_at), **row_json(r)})

        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=checkin_history.csv"},
        )

    @app.route("/api/logs/<log_id>", methods=["PUT"], endpoint="api_log_update")
    def api_log_update(log_id: str):
        data = json_body()
        try:
            entry = container.log_service.apply_corrections(
                log_id,
                data.get("operations") or [],
                passcode=data.get("passcode"),
            )
            return ok({"log": entry_json(entry), "message": "Check-in log updated successfully!"})
        except Exception as e:
            return fail(e)
