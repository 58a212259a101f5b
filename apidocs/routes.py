# apidocs/routes.py
"""Self-describing API documentation: OpenAPI document + Swagger UI page."""
from flask import Blueprint, jsonify, request

from clients.export import EXPORT_HEADER
from clients.schemas import ClientSubmission

bp = Blueprint("apidocs", __name__)

SWAGGER_UI_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Debt Review API</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    SwaggerUIBundle({url: "%s", dom_id: "#swagger-ui"});
  </script>
</body>
</html>
"""


def _envelope_schema(code: int, response: str, info: dict) -> dict:
    return {
        "type": "object",
        "properties": {
            "code": {"type": "integer", "example": code},
            "response": {"type": "string", "example": response},
            "info": info,
            "leadId": {"type": "integer", "nullable": True},
            "processTime": {"type": "integer", "example": 0},
            "timestamp": {"type": "string", "example": "2024-07-31T12:59:15.607Z"},
        },
    }


def _error_info(example: str) -> dict:
    return {"type": "object", "properties": {"error": {"type": "string", "example": example}}}


def build_openapi(server_url: str) -> dict:
    submission = ClientSubmission.model_json_schema()
    csv_example = ",".join(EXPORT_HEADER) + "\n"
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Debt Review API",
            "version": "1.0.0",
            "description": "API for managing debt review clients",
        },
        "servers": [{"url": server_url}],
        "paths": {
            "/api/clients/add": {
                "post": {
                    "summary": "Add a new client",
                    "requestBody": {
                        "required": True,
                        "content": {"application/json": {"schema": submission}},
                    },
                    "responses": {
                        "201": {
                            "description": "Client added successfully",
                            "content": {"application/json": {"schema": _envelope_schema(
                                1, "OK", {"type": "array", "items": {"type": "object"}})}},
                        },
                        "400": {
                            "description": "Validation error, duplicate lead or insert failure",
                            "content": {"application/json": {"schema": _envelope_schema(
                                -5, "Validation error", {"type": "array", "items": {"type": "object"}})}},
                        },
                        "500": {
                            "description": "Internal server error",
                            "content": {"application/json": {"schema": _envelope_schema(
                                -100, "Internal error", _error_info("Database error"))}},
                        },
                    },
                }
            },
            "/api/clients/export": {
                "get": {
                    "summary": "Export all clients to CSV",
                    "responses": {
                        "200": {
                            "description": "CSV file containing all clients",
                            "content": {"text/csv": {"schema": {"type": "string", "example": csv_example}}},
                        },
                        "500": {
                            "description": "Internal error",
                            "content": {"application/json": {"schema": _envelope_schema(
                                -100, "Internal error", _error_info("CSV writing error"))}},
                        },
                    },
                }
            },
        },
    }


@bp.get("/openapi.json")
def openapi():
    return jsonify(build_openapi(request.host_url.rstrip("/")))


@bp.get("")
def swagger_ui():
    return SWAGGER_UI_HTML % (request.script_root + "/api-docs/openapi.json"), 200, {
        "Content-Type": "text/html; charset=utf-8"
    }
