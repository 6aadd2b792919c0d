"""Password hashing and JWT session token issuance/verification."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from taskboard.core.config import Settings
from taskboard.core.errors import InvalidTokenError
from taskboard.schemas.auth import TokenClaims

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

REQUIRED_CLAIMS = ("sub", "email", "username", "exp", "iat")


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    The secret is read once when the service is built at startup; there is no
    key rotation. Verification is stateless.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(minutes=60)) -> None:
        if not secret or not secret.strip():
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )

    def issue(self, claims: TokenClaims, ttl: timedelta | None = None, now: datetime | None = None) -> str:
        """Create a JWT carrying sub (user id), email, username, optional role, iat and exp."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": claims.sub,
            "email": claims.email,
            "username": claims.username,
            "iat": issued_at,
            "exp": issued_at + (ttl if ttl is not None else self.ttl),
        }
        if claims.role is not None:
            payload["role"] = claims.role
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a JWT; return its claims.
        Raises InvalidTokenError on bad signature, malformed token, missing claims or expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        try:
            return TokenClaims(
                sub=payload["sub"],
                email=payload["email"],
                username=payload["username"],
                role=payload.get("role"),
            )
        except (KeyError, ValueError) as e:
            raise InvalidTokenError() from e
