"""
Pydantic schemas for contacts (customers and suppliers).
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from bookkeeping.models.enums import ContactType


def _check_email(v: str | None) -> str | None:
    if v is None:
        return v
    local, _, domain = v.partition("@")
    if not local or "." not in domain:
        raise ValueError("email must look like name@domain.tld")
    return v


class ContactCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    contact_type: ContactType
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    address: str | None = None

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str | None) -> str | None:
        return _check_email(v)


class ContactUpdate(BaseModel):
    """Partial update. Only fields present in the request are changed."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    contact_type: ContactType | None = None
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    address: str | None = None

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str | None) -> str | None:
        return _check_email(v)


class ContactResponse(BaseModel):
    id: int
    name: str
    contact_type: ContactType
    phone: str | None
    email: str | None
    address: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
