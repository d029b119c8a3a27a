"""
Pydantic models for input validation and type safety.
"""
import re
from typing import Dict, Type

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

# Python attribute -> name used by the form and the stored history
WIRE_NAMES = {
    "business_name": "businessName",
    "location": "location",
    "email": "email",
    "phone_number": "phoneNumber",
}
_FROM_WIRE = {wire: name for name, wire in WIRE_NAMES.items()}


class AuditRequest(BaseModel):
    """The fields sent to the generation service for one audit."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    business_name: str = Field(..., min_length=1, max_length=200, description="Name of the business")
    location: str = Field(..., min_length=1, max_length=200, description="City/State location")
    phone_number: str = Field(..., min_length=1, max_length=40, description="Business phone number")

    @field_validator('business_name', 'location', mode='after')
    @classmethod
    def collapse_spaces(cls, v: str) -> str:
        """Collapse runs of whitespace left over from typing."""
        return " ".join(v.split())

    @field_validator('phone_number', mode='after')
    @classmethod
    def clean_phone(cls, v: str) -> str:
        """Keep the number as typed, but it has to contain digits."""
        if not re.search(r'\d', v):
            raise ValueError('Phone number must contain digits')
        return " ".join(v.split())


class BusinessInput(AuditRequest):
    """A full form submission: the audit request plus a contact email."""
    email: EmailStr = Field(..., description="Contact email for the submission")


def _validate(model: Type[AuditRequest], data: Dict[str, str]):
    normalized = {_FROM_WIRE.get(key, key): value for key, value in data.items()}

    missing = [
        WIRE_NAMES[name] for name in WIRE_NAMES
        if name in model.model_fields and not str(normalized.get(name) or "").strip()
    ]
    if missing:
        raise ValidationError(
            f"Missing required field(s): {', '.join(missing)}", fields=missing
        )

    try:
        return model(**normalized)
    except PydanticValidationError as e:
        fields = []
        for err in e.errors():
            name = str(err["loc"][0]) if err["loc"] else ""
            fields.append(WIRE_NAMES.get(name, name))
        details = "; ".join(f"{field}: {err['msg']}" for field, err in zip(fields, e.errors()))
        raise ValidationError(f"Invalid input: {details}", fields=fields) from e


def validate_audit_request(data: Dict[str, str]) -> AuditRequest:
    """
    Validate the name, location and phone number an audit is built from.
    Other keys (such as email) are ignored.

    Raises:
        ValidationError: If one of the three fields is empty or malformed
    """
    return _validate(AuditRequest, data)


def validate_business_input(data: Dict[str, str]) -> BusinessInput:
    """
    Validate and sanitize form input.

    Args:
        data: Raw field values, keyed by attribute name or form name

    Returns:
        Validated BusinessInput model

    Raises:
        ValidationError: If a required field is empty or a value is malformed
    """
    return _validate(BusinessInput, data)
