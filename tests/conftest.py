# tests/conftest.py
import random
import string

import httpx
import pytest

from app import create_app
from extensions import db
from models.client import Client
from scripts.init_db import run as init_db_run

# In-process: httpx talks to the Flask app through WSGI, no server needed
BASE_URL = "http://testserver/api"


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'clients.db'}",
        "LOG_LEVEL": "WARNING",
    })
    with app.app_context():
        init_db_run()
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def client(app):
    with httpx.Client(transport=httpx.WSGITransport(app=app), timeout=30.0) as c:
        yield c


@pytest.fixture
def row_count(app):
    def _count():
        with app.app_context():
            return db.session.query(Client).count()
    return _count


@pytest.fixture
def use_repository(app):
    """Swaps the datastore handle the handlers receive for the rest of the test."""
    def _use(factory):
        app.config["CLIENT_REPOSITORY_FACTORY"] = factory
    return _use


# Simple data helpers
def rand_phone():
    return "+2782" + "".join(random.choice("0123456789") for _ in range(7))


def rand_name(prefix="QA"):
    suffix = "".join(random.choice(string.ascii_uppercase) for _ in range(5))
    return f"{prefix} {suffix}"


def lead_payload(**overrides):
    payload = {
        "title": "Mr.",
        "name": rand_name(),
        "surname": "Doe",
        "phone_number": rand_phone(),
        "id_number": "1234567890123",
        "email": "john.doe@example.com",
    }
    payload.update(overrides)
    return payload
