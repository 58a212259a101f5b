from __future__ import annotations

from datetime import datetime, timezone

from flask import jsonify


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def status_for(code: int) -> int:
    # Insert path maps every non-OK code to 400, including datastore faults
    return 201 if code == 1 else 400


def envelope(code: int, response: str, info=None, lead_id: int | None = None,
             status: int | None = None):
    payload = {
        "code": code,
        "response": response,
        "info": [] if info is None else info,
        "leadId": lead_id,
        "processTime": 0,
        "timestamp": _timestamp(),
    }
    return jsonify(payload), status if status is not None else status_for(code)


def created(lead_id: int):
    return envelope(1, "OK", info=[], lead_id=lead_id, status=201)


def validation_error(violations: list):
    return envelope(-5, "Validation error", info=violations, status=400)


def duplicate():
    payload = {
        "code": -2,
        "response": "Invalid Lead",
        "description": "Duplicate",
        "leadId": None,
        "processTime": 0,
        "timestamp": _timestamp(),
    }
    return jsonify(payload), 400


def internal_error(error: str, status: int = 500):
    return envelope(-100, "Internal error", info={"error": error}, status=status)
