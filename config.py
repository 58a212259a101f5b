# config.py
import os
from urllib.parse import quote_plus


def _database_uri():
    # Prefer DATABASE_URL, then SQLALCHEMY_DATABASE_URI, then DB_* (host/user/password/name)
    uri = os.getenv("DATABASE_URL") or os.getenv("SQLALCHEMY_DATABASE_URI")
    if not uri:
        host = os.getenv("DB_HOST")
        name = os.getenv("DB_NAME")
        if not host or not name:
            return None
        driver = os.getenv("DB_DRIVER", "postgresql+psycopg2")
        user = quote_plus(os.getenv("DB_USER", ""))
        password = quote_plus(os.getenv("DB_PASSWORD", ""))
        port = os.getenv("DB_PORT")
        auth = f"{user}:{password}@" if user else ""
        netloc = f"{host}:{port}" if port else host
        uri = f"{driver}://{auth}{netloc}/{name}"

    # Fix legacy 'postgres://' URLs
    if uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql+psycopg2://", 1)
    return uri


def engine_options(uri):
    """Pool options only make sense for server databases; SQLite gets none."""
    if uri and uri.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", "1800")),
        "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "10")),
    }


class Config:
    # DB
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = os.getenv("SQLALCHEMY_ECHO", "0") == "1"
    SQLALCHEMY_ENGINE_OPTIONS = engine_options(SQLALCHEMY_DATABASE_URI)

    # Callable (session) -> repository used by the handlers; None means ClientRepository
    CLIENT_REPOSITORY_FACTORY = None

    # CORS
    _cors_from_env = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
    CORS_ORIGINS = _cors_from_env or "*"

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE") or None

    PORT = int(os.getenv("PORT", "3000"))
