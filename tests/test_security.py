"""Unit tests for taskboard.core.security: password hashing and session tokens."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from taskboard.core.errors import InvalidTokenError, UnauthorizedError
from taskboard.core.security import TokenService, hash_password, verify_password
from taskboard.schemas.auth import TokenClaims

SECRET = "unit-test-signing-secret-0123456789abcdef"


def _claims(**overrides: object) -> TokenClaims:
    values: dict[str, object] = {
        "sub": "uid-1",
        "email": "ana@example.com",
        "username": "ana",
        "role": "employee",
    }
    values.update(overrides)
    return TokenClaims(**values)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("hunter22", rounds=4)
        self.assertNotEqual(hashed, "hunter22")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("hunter22", hashed))

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("hunter22", rounds=4)
        self.assertFalse(verify_password("hunter23", hashed))

    def test_garbage_or_missing_hash_fails_closed(self) -> None:
        self.assertFalse(verify_password("hunter22", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("hunter22", None))
        self.assertFalse(verify_password("hunter22", ""))


class TestTokenService(unittest.TestCase):
    def setUp(self) -> None:
        self.service = TokenService(SECRET, ttl=timedelta(minutes=60))

    def test_issued_token_verifies_to_same_claims(self) -> None:
        token = self.service.issue(_claims())
        claims = self.service.verify(token)
        self.assertEqual(claims.sub, "uid-1")
        self.assertEqual(claims.email, "ana@example.com")
        self.assertEqual(claims.username, "ana")
        self.assertEqual(claims.role, "employee")

    def test_role_is_optional(self) -> None:
        token = self.service.issue(_claims(role=None))
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        self.assertNotIn("role", payload)
        self.assertIsNone(self.service.verify(token).role)

    def test_expiry_uses_configured_ttl(self) -> None:
        now = datetime.now(UTC).replace(microsecond=0)
        token = self.service.issue(_claims(), now=now)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        self.assertEqual(payload["exp"] - payload["iat"], 3600)

    def test_expired_token_is_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=5)
        token = self.service.issue(_claims(), ttl=timedelta(seconds=60), now=issued)
        with self.assertRaises(InvalidTokenError) as ctx:
            self.service.verify(token)
        self.assertIsInstance(ctx.exception, UnauthorizedError)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_tampered_token_is_rejected(self) -> None:
        token = self.service.issue(_claims())
        header, payload, signature = token.split(".")
        forged = jwt.encode(
            {"sub": "uid-1", "email": "ana@example.com", "username": "ana", "role": "admin",
             "iat": datetime.now(UTC), "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "some-other-secret-that-is-long-enough-000",
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.service.verify(forged)
        with self.assertRaises(InvalidTokenError):
            self.service.verify(f"{header}.{payload}x.{signature}")

    def test_malformed_token_is_rejected(self) -> None:
        for token in ("", "abc", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(InvalidTokenError):
                    self.service.verify(token)

    def test_token_missing_required_claims_is_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "uid-1", "exp": datetime.now(UTC) + timedelta(minutes=5), "iat": datetime.now(UTC)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.service.verify(token)

    def test_empty_secret_is_refused(self) -> None:
        with self.assertRaises(ValueError):
            TokenService("  ")


if __name__ == "__main__":
    unittest.main()
