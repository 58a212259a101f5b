# utils/errors.py
from werkzeug.exceptions import HTTPException

from utils.responses import envelope, internal_error


class ApiError(Exception):
    """Base for failures the handlers turn into an envelope."""


class ValidationError(ApiError):
    def __init__(self, violations):
        super().__init__(f"{len(violations)} invalid field(s)")
        self.violations = violations


class DuplicateError(ApiError):
    pass


class DatastoreError(ApiError):
    pass


class SerializationError(ApiError):
    pass


def register_error_handlers(app):
    """Registers global handlers so framework errors also use the envelope."""

    @app.errorhandler(404)
    def not_found(_):
        return envelope(-404, "Not Found", info={"error": "Not Found"}, status=404)

    @app.errorhandler(405)
    def method_not_allowed(_):
        return envelope(-405, "Method Not Allowed", info={"error": "Method Not Allowed"}, status=405)

    @app.errorhandler(Exception)
    def unhandled_exception(e):
        # HTTPException (e.g. abort(413)) keeps its own status
        if isinstance(e, HTTPException):
            return envelope(-100, "Internal error", info={"error": e.description}, status=e.code)

        # logged server side, no stack trace for the caller
        app.logger.exception("Unhandled Exception: %s", e)

        return internal_error("Internal error")
