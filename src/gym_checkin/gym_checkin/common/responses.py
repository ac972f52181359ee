from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.exceptions import AuthorizationError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

_STATUS = (
    (ValidationError, "validation", 400),
    (AuthorizationError, "authorization", 403),
    (PersistenceError, "persistence", 503),
)


def ok(payload: dict | None = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(error: Exception):
    """Map a domain error to its discrete JSON outcome; anything else is a 500."""

    for exc_type, kind, status in _STATUS:
        if isinstance(error, exc_type):
            return jsonify({"success": False, "error": kind, "message": str(error)}), status

    logger.exception("Unexpected error", exc_info=error)
    return jsonify({"success": False, "error": "internal", "message": "Internal server error"}), 500


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def iso(value) -> str | None:
    return value.isoformat() if value else None
