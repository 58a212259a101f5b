# clients/repository.py
"""Datastore handle for the clients table; the handlers never touch the session directly."""
from __future__ import annotations

from typing import List

from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db
from models.client import Client
from utils.errors import DatastoreError, DuplicateError


class ClientRepository:
    def __init__(self, session):
        self.session = session

    def _lookup(self, phone_number: str):
        return self.session.execute(
            select(Client.lead_id).where(Client.phone_number == phone_number).limit(1)
        ).first()

    def phone_exists(self, phone_number: str) -> bool:
        try:
            found = self._lookup(phone_number)
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.exception("Duplicate lookup failed")
            raise DatastoreError("Database error") from e
        return found is not None

    def insert(self, submission) -> int:
        client = Client(
            title=submission.title,
            name=submission.name,
            surname=submission.surname,
            phone_number=submission.phone_number,
            id_number=submission.id_number,
            email=str(submission.email),
            notes=submission.notes,
            optindate=submission.optindate,
            preferred_time=submission.preferred_time_value,
            offer_id=submission.offerID,
        )
        try:
            self.session.add(client)
            self.session.flush()
            lead_id = client.lead_id
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            # a concurrent insert won the race on the phone_number constraint
            if self._phone_taken(submission.phone_number):
                raise DuplicateError(submission.phone_number) from e
            current_app.logger.exception("Insert failed")
            raise DatastoreError("Database error") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.exception("Insert failed")
            raise DatastoreError("Database error") from e
        return lead_id

    def list_all(self) -> List[Client]:
        try:
            return list(self.session.execute(select(Client).order_by(Client.lead_id.asc())).scalars())
        except SQLAlchemyError as e:
            self.session.rollback()
            current_app.logger.exception("Error fetching clients")
            raise DatastoreError("Database error") from e

    def _phone_taken(self, phone_number: str) -> bool:
        try:
            return self._lookup(phone_number) is not None
        except SQLAlchemyError:
            self.session.rollback()
            return False


def get_repository():
    """Builds the repository for the current request from CLIENT_REPOSITORY_FACTORY."""
    factory = current_app.config.get("CLIENT_REPOSITORY_FACTORY") or ClientRepository
    return factory(db.session)
