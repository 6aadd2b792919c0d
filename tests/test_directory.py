"""Unit tests for the user directory backends."""

import json
import unittest

import httpx
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from taskboard.core.database import build_session_factory
from taskboard.core.errors import ConflictError, DirectoryError
from taskboard.core.security import verify_password
from taskboard.models import Base, Identity
from taskboard.services.directory import (
    HttpUserDirectory,
    LocalUserDirectory,
    build_user_directory,
)
from tests.api_support import make_settings


class TestLocalUserDirectory(unittest.TestCase):
    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.addCleanup(engine.dispose)
        self.session_factory = build_session_factory(engine)
        self.directory = LocalUserDirectory(self.session_factory, bcrypt_rounds=4)

    def test_create_stores_hashed_credential(self) -> None:
        uid = self.directory.create_identity("ana@example.com", "secret-pass", "ana")
        with self.session_factory() as db:
            identity = db.get(Identity, uid)
        self.assertEqual(identity.email, "ana@example.com")
        self.assertEqual(identity.display_name, "ana")
        self.assertNotEqual(identity.password_hash, "secret-pass")
        self.assertTrue(verify_password("secret-pass", identity.password_hash))

    def test_duplicate_email_conflicts(self) -> None:
        self.directory.create_identity("ana@example.com", "secret-pass", "ana")
        with self.assertRaises(ConflictError):
            self.directory.create_identity("ana@example.com", "other-pass", "ana2")

    def test_delete_identity_and_ignore_unknown(self) -> None:
        uid = self.directory.create_identity("ana@example.com", "secret-pass", "ana")
        self.directory.delete_identity(uid)
        self.directory.delete_identity("does-not-exist")
        with self.session_factory() as db:
            self.assertIsNone(db.get(Identity, uid))


class TestHttpUserDirectory(unittest.TestCase):
    def _directory(self, handler) -> HttpUserDirectory:
        directory = HttpUserDirectory(
            "https://dir.example.com",
            api_key="dir-key",
            transport=httpx.MockTransport(handler),
        )
        self.addCleanup(directory.close)
        return directory

    def test_create_posts_identity_and_returns_uid(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"uid": "remote-123"})

        uid = self._directory(handler).create_identity("ana@example.com", "secret-pass", "ana")
        self.assertEqual(uid, "remote-123")
        self.assertEqual(seen[0].method, "POST")
        self.assertEqual(seen[0].url.path, "/users")
        self.assertEqual(seen[0].headers["Authorization"], "Bearer dir-key")
        self.assertEqual(
            json.loads(seen[0].content),
            {"email": "ana@example.com", "password": "secret-pass", "display_name": "ana"},
        )

    def test_create_conflict(self) -> None:
        directory = self._directory(lambda request: httpx.Response(409, json={"error": "exists"}))
        with self.assertRaises(ConflictError):
            directory.create_identity("ana@example.com", "secret-pass", "ana")

    def test_create_server_error_and_missing_uid(self) -> None:
        with self.assertRaises(DirectoryError):
            self._directory(lambda r: httpx.Response(500, text="boom")).create_identity(
                "ana@example.com", "secret-pass", "ana"
            )
        with self.assertRaises(DirectoryError):
            self._directory(lambda r: httpx.Response(201, json={})).create_identity(
                "ana@example.com", "secret-pass", "ana"
            )

    def test_unreachable_directory(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(DirectoryError):
            self._directory(handler).create_identity("ana@example.com", "secret-pass", "ana")

    def test_delete_ignores_404(self) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(404)

        self._directory(handler).delete_identity("remote-123")
        self.assertEqual(paths, ["/users/remote-123"])

    def test_delete_error_raises(self) -> None:
        with self.assertRaises(DirectoryError):
            self._directory(lambda r: httpx.Response(503)).delete_identity("remote-123")


class TestBuildUserDirectory(unittest.TestCase):
    def test_local_by_default(self) -> None:
        directory = build_user_directory(make_settings(), session_factory=None)
        self.assertIsInstance(directory, LocalUserDirectory)

    def test_http_requires_url(self) -> None:
        with self.assertRaises(ValueError):
            build_user_directory(make_settings(USER_DIRECTORY_BACKEND="http"), session_factory=None)

    def test_http_backend(self) -> None:
        directory = build_user_directory(
            make_settings(USER_DIRECTORY_BACKEND="http", USER_DIRECTORY_URL="https://dir.example.com"),
            session_factory=None,
        )
        self.addCleanup(directory.close)
        self.assertIsInstance(directory, HttpUserDirectory)


if __name__ == "__main__":
    unittest.main()
