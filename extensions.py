# extensions.py
import logging
import sys

from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS

db = SQLAlchemy()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def init_cors(app):
    allowed_origins = app.config.get("CORS_ORIGINS", "*")

    # Lead forms post from the browser; only the API surface is exposed
    CORS(
        app,
        resources={r"/api/*": {"origins": allowed_origins}},
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        supports_credentials=False,
    )


def configure_logging(app):
    """Console handler always, file handler when LOG_FILE is configured."""
    level = getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers = [logging.StreamHandler(sys.stderr)]
    log_file = app.config.get("LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    app.logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        app.logger.addHandler(handler)
    app.logger.setLevel(level)
    app.logger.propagate = False
