"""Shared schema pieces: email shape, message envelope."""

import re

from pydantic import BaseModel, Field

# Same shape the legacy frontend validates against.
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,4}$")

EMAIL_MAX_LENGTH = 320
NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 5_000

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


def normalize_email(value: str) -> str:
    """Strip and lowercase; raise ValueError when the address does not match EMAIL_PATTERN."""
    if not isinstance(value, str):
        raise ValueError("Email must be a string.")
    email = value.strip().lower()
    if not email or len(email) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format.")
    return email


def normalize_required_text(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} is required.")
    return value.strip()


class MessageResponse(BaseModel):
    """Plain acknowledgement body; also the shape of every error response."""

    message: str = Field(..., description="Human-readable message")
