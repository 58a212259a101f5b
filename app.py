# app.py
from pathlib import Path
from dotenv import load_dotenv

# Load .env before importing config/extensions
ENV_PATH = Path(__file__).resolve().with_name(".env")
load_dotenv(dotenv_path=ENV_PATH)

from flask import Flask, jsonify
from sqlalchemy import text

from config import Config, engine_options
from extensions import db, init_cors, configure_logging
from utils.errors import register_error_handlers


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)
        if "SQLALCHEMY_ENGINE_OPTIONS" not in test_config:
            app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options(app.config.get("SQLALCHEMY_DATABASE_URI"))

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("DATABASE_URL or DB_HOST/DB_NAME not set in environment/.env")

    configure_logging(app)
    db.init_app(app)
    init_cors(app)
    register_error_handlers(app)

    # Blueprints
    from clients.routes import bp as clients_bp
    from apidocs.routes import bp as apidocs_bp

    app.register_blueprint(clients_bp, url_prefix="/api/clients")
    app.register_blueprint(apidocs_bp, url_prefix="/api-docs")

    # Health
    @app.get("/api/health")
    def health():
        # Check database connectivity
        try:
            db.session.execute(text("SELECT 1"))
            db_ok = True
        except Exception:
            db.session.rollback()
            app.logger.exception("Health check: database unreachable")
            db_ok = False

        payload = {
            "status": "ok" if db_ok else "error",
            "db": "ok" if db_ok else "error",
        }
        return jsonify(payload), (200 if db_ok else 500)

    @app.cli.command("init-db")
    def init_db_cmd():
        from scripts.init_db import run as init_db_run
        init_db_run()

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        from scripts.init_db import run as init_db_run
        init_db_run()

    app.logger.info("Server is running on http://localhost:%s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"])
