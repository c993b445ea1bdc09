"""Contributor schemas."""

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import field_validator

from .base import ApiModel


def validate_email_address(v: str) -> str:
    """Strip and syntax-check an email address.

    The stripped input is returned as typed, not the normalized form:
    contributors are matched on the exact address.
    """
    v = v.strip()
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email address: {e}") from e
    return v


class UserCreate(ApiModel):
    """Schema for creating a user."""
    name: str
    email: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        return v

    @field_validator('email')
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email_address(v)


class UserResponse(ApiModel):
    """Schema for user response."""
    id: int
    name: str
    email: str
    created_at: datetime
