"""Request/response schemas for registration, login and session tokens."""

from pydantic import BaseModel, Field, field_validator

from taskboard.schemas.common import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    normalize_email,
    normalize_required_text,
)


class RegisterRequest(BaseModel):
    """Self-service sign-up."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Display name")
    email: str = Field(..., description="Login email; stored lowercase")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return normalize_required_text(v, "username")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class RegisterResponse(BaseModel):
    message: str
    uid: str = Field(..., description="Identity id issued by the user directory")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., description="Login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class TokenResponse(BaseModel):
    """JWT access token returned after successful login or refresh."""

    message: str
    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")


class TokenClaims(BaseModel):
    """Identity facts carried inside a verified session token."""

    sub: str = Field(..., min_length=1, description="User id")
    email: str
    username: str
    role: str | None = None
