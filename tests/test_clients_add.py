import pytest
from sqlalchemy.exc import OperationalError

from clients.repository import ClientRepository
from conftest import lead_payload, rand_phone
from utils.errors import DatastoreError


class BrokenLookupRepository(ClientRepository):
    def phone_exists(self, phone_number):
        raise DatastoreError("Database error")


class BrokenInsertRepository(ClientRepository):
    def insert(self, submission):
        raise DatastoreError("Database error")


class RacingRepository(ClientRepository):
    # the pre-check loses the race: another request inserted in between
    def phone_exists(self, phone_number):
        return False


@pytest.mark.smoke
def test_add_client_created(client, base_url, row_count):
    payload = {
        "title": "Mr.",
        "name": "John",
        "surname": "Doe",
        "phone_number": "+27123456789",
        "id_number": "1234567890123",
        "email": "john.doe@example.com",
    }
    r = client.post(f"{base_url}/clients/add", json=payload)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["code"] == 1
    assert body["response"] == "OK"
    assert body["info"] == []
    assert isinstance(body["leadId"], int)
    assert body["processTime"] == 0
    assert body["timestamp"].endswith("Z")
    assert row_count() == 1

    # same payload again -> duplicate
    r = client.post(f"{base_url}/clients/add", json=payload)
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == -2
    assert body["response"] == "Invalid Lead"
    assert body["description"] == "Duplicate"
    assert body["leadId"] is None
    assert row_count() == 1


def test_add_client_with_optional_fields(client, base_url, row_count):
    payload = lead_payload(
        notes="Client prefers to be contacted in the evening.",
        optindate="2024-07-31",
        preferred_time="18:00:00",
        offerID="Offer123",
    )
    r = client.post(f"{base_url}/clients/add", json=payload)
    assert r.status_code == 201, r.text
    assert row_count() == 1


def test_lead_ids_are_distinct(client, base_url):
    ids = set()
    for _ in range(3):
        r = client.post(f"{base_url}/clients/add", json=lead_payload())
        assert r.status_code == 201, r.text
        ids.add(r.json()["leadId"])
    assert len(ids) == 3


def test_short_id_number_rejected(client, base_url, row_count):
    r = client.post(f"{base_url}/clients/add", json=lead_payload(id_number="12345"))
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == -5
    assert body["response"] == "Validation error"
    assert body["leadId"] is None
    assert [v["msg"] for v in body["info"]] == ["ID number must be 13 digits"]
    assert row_count() == 0


def test_every_failing_field_is_listed(client, base_url, row_count):
    r = client.post(f"{base_url}/clients/add", json={
        "title": "",
        "phone_number": "not-a-phone",
        "id_number": "12345",
        "email": "nope",
        "preferred_time": "25:00:00",
    })
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == -5
    paths = [v["path"] for v in body["info"]]
    assert paths == ["title", "name", "surname", "phone_number", "id_number", "email", "preferred_time"]
    assert all(v["location"] == "body" for v in body["info"])
    assert row_count() == 0


def test_non_json_body_is_a_validation_error(client, base_url):
    r = client.post(
        f"{base_url}/clients/add",
        content=b"title=Mr.",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == -5


def test_lookup_failure_is_500(client, base_url, use_repository, row_count):
    use_repository(BrokenLookupRepository)
    r = client.post(f"{base_url}/clients/add", json=lead_payload())
    assert r.status_code == 500
    body = r.json()
    assert body["code"] == -100
    assert body["response"] == "Internal error"
    assert body["info"] == {"error": "Database error"}
    assert row_count() == 0


def test_insert_failure_keeps_generic_400(client, base_url, use_repository, row_count):
    use_repository(BrokenInsertRepository)
    r = client.post(f"{base_url}/clients/add", json=lead_payload())
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == -100
    assert body["info"] == {"error": "Database error"}
    assert row_count() == 0


@pytest.mark.destructive
def test_duplicate_race_is_caught_by_constraint(client, base_url, use_repository, row_count):
    phone = rand_phone()
    r = client.post(f"{base_url}/clients/add", json=lead_payload(phone_number=phone))
    assert r.status_code == 201, r.text

    use_repository(RacingRepository)
    r = client.post(f"{base_url}/clients/add", json=lead_payload(phone_number=phone))
    assert r.status_code == 400
    assert r.json()["code"] == -2
    assert r.json()["description"] == "Duplicate"
    assert row_count() == 1


def test_repository_wraps_sqlalchemy_errors(app):
    class FailingSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))

        def rollback(self):
            pass

    repo = ClientRepository(FailingSession())
    with app.app_context():
        with pytest.raises(DatastoreError):
            repo.phone_exists("+27123456789")
        with pytest.raises(DatastoreError):
            repo.list_all()


def test_numeric_notes_accepted(client, base_url, row_count):
    r = client.post(f"{base_url}/clients/add", json=lead_payload(notes=123))
    assert r.status_code == 201, r.text
    assert row_count() == 1


def test_non_ascii_time_is_validation_error(client, base_url, row_count):
    r = client.post(f"{base_url}/clients/add", json=lead_payload(preferred_time="1٨:00:00"))
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == -5
    assert [v["path"] for v in body["info"]] == ["preferred_time"]
    assert row_count() == 0


def test_insert_returns_flushed_lead_id(app):
    from clients.schemas import validate_submission
    from extensions import db
    from models.client import Client

    submission = validate_submission(lead_payload())
    with app.app_context():
        lead_id = ClientRepository(db.session).insert(submission)
        assert isinstance(lead_id, int)
        assert db.session.get(Client, lead_id).phone_number == submission.phone_number
