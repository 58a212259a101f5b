# clients/schemas.py
"""
Submission schema for POST /api/clients/add.

Pydantic reports every failing field at once; `validate_submission` turns
those errors into one violation per field, carrying the fixed messages
lead providers match on.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from utils.errors import ValidationError

PHONE_RE = r"^\+?[0-9]{9,15}$"
TIME_RE = r"^([01][0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9])$"

FIELD_MESSAGES = {
    "title": "Title is required",
    "name": "Name is required",
    "surname": "Surname is required",
    "phone_number": "Invalid phone number",
    "id_number": "ID number must be 13 digits",
    "email": "Invalid email",
    "notes": "Notes must be text",
    "optindate": "Invalid opt-in date",
    "preferred_time": "Invalid preferred time format",
    "offerID": "OfferID must be a string",
}


class ClientSubmission(BaseModel):
    title: str = Field(..., min_length=1, examples=["Mr."])
    name: str = Field(..., min_length=1, examples=["John"])
    surname: str = Field(..., min_length=1, examples=["Doe"])
    phone_number: str = Field(..., pattern=PHONE_RE, examples=["+27123456789"])
    id_number: str = Field(..., min_length=13, max_length=13, examples=["1234567890123"])
    email: str = Field(..., examples=["john.doe@example.com"], json_schema_extra={"format": "email"})
    notes: Optional[str] = Field(default=None, examples=["Client prefers to be contacted in the evening."])
    optindate: Optional[date] = Field(default=None, examples=["2024-07-31"])
    preferred_time: Optional[str] = Field(default=None, pattern=TIME_RE, examples=["18:00:00"])
    offerID: Optional[str] = Field(default=None, examples=["Offer123"])

    @field_validator("email")
    @classmethod
    def _email_syntax(cls, v):
        # checked, never rewritten: the stored address is the submitted one
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_text(cls, v):
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("preferred_time")
    @classmethod
    def _clock_time(cls, v):
        if v is not None:
            time.fromisoformat(v)
        return v

    @field_validator("optindate", mode="before")
    @classmethod
    def _iso_date(cls, v):
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("optindate must be an ISO-8601 string")
        try:
            return date.fromisoformat(v)
        except ValueError:
            # full timestamps are accepted, only the calendar date is kept
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()

    @property
    def preferred_time_value(self) -> Optional[time]:
        if self.preferred_time is None:
            return None
        return time.fromisoformat(self.preferred_time)


def _violation(field: str, value: Any) -> Dict[str, Any]:
    return {
        "type": "field",
        "value": value,
        "msg": FIELD_MESSAGES.get(field, f"Invalid {field}"),
        "path": field,
        "location": "body",
    }


def validate_submission(payload: Any) -> ClientSubmission:
    """Validates a request body, raising ValidationError with every failing field."""
    if not isinstance(payload, dict):
        payload = {}
    try:
        return ClientSubmission.model_validate(payload)
    except PydanticValidationError as e:
        failed = {err["loc"][0] for err in e.errors() if err["loc"]}
        violations: List[Dict[str, Any]] = [
            _violation(field, payload.get(field))
            for field in ClientSubmission.model_fields
            if field in failed
        ]
        raise ValidationError(violations) from e
