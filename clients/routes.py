# clients/routes.py
import io

from flask import Blueprint, current_app, request, send_file

from clients.export import render_csv
from clients.repository import get_repository
from clients.schemas import validate_submission
from utils.errors import DatastoreError, DuplicateError, SerializationError, ValidationError
from utils.responses import created, duplicate, internal_error, status_for, validation_error

# Blueprint without its own prefix; app.py mounts it at /api/clients
bp = Blueprint("clients", __name__)


@bp.post("/add")
def add_client():
    payload = request.get_json(silent=True)

    try:
        submission = validate_submission(payload)
    except ValidationError as e:
        return validation_error(e.violations)

    repo = get_repository()

    try:
        if repo.phone_exists(submission.phone_number):
            current_app.logger.info("Duplicate lead rejected")
            return duplicate()
    except DatastoreError:
        return internal_error("Database error")

    try:
        lead_id = repo.insert(submission)
    except DuplicateError:
        current_app.logger.info("Duplicate lead rejected on insert")
        return duplicate()
    except DatastoreError:
        # insert faults share the generic non-OK status (400)
        return internal_error("Database error", status=status_for(-100))

    current_app.logger.info("Lead created leadId=%s", lead_id)
    return created(lead_id)


@bp.get("/export")
def export_clients():
    try:
        rows = get_repository().list_all()
    except DatastoreError:
        return internal_error("Database error")

    try:
        data = render_csv(rows)
    except SerializationError as e:
        current_app.logger.error("Error writing CSV file: %s", e)
        return internal_error("CSV writing error")

    return send_file(
        io.BytesIO(data),
        mimetype="text/csv",
        as_attachment=True,
        download_name="clients.csv",
    )
