"""Unit tests for taskboard.core.config validation."""

import unittest
from unittest.mock import patch

from pydantic import ValidationError

from taskboard.core.config import Settings

SECRET = "unit-test-signing-secret-0123456789abcdef"


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)


class TestJwtSecret(unittest.TestCase):
    """The signing secret has no default: startup fails fast without it."""

    def test_missing_secret_fails(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ValidationError):
                _settings()

    def test_blank_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_secret_loaded(self) -> None:
        s = _settings(JWT_SECRET=SECRET)
        self.assertEqual(s.JWT_SECRET.get_secret_value(), SECRET)


class TestDefaults(unittest.TestCase):
    def test_token_ttl_default_is_one_hour(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            s = _settings(JWT_SECRET=SECRET)
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 60)
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.API_PREFIX, "/api")
        self.assertEqual(s.USER_DIRECTORY_BACKEND, "local")


class TestValidators(unittest.TestCase):
    def test_database_url_must_be_postgres_or_sqlite(self) -> None:
        _settings(JWT_SECRET=SECRET, DATABASE_URL="sqlite:///./taskboard.db")
        _settings(JWT_SECRET=SECRET, DATABASE_URL="postgresql+psycopg2://u:p@db/taskboard")
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SECRET, DATABASE_URL="mysql://u:p@db/taskboard")

    def test_ttl_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SECRET, JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SECRET, JWT_EXPIRE_MINUTES=10081)

    def test_api_prefix_normalized(self) -> None:
        s = _settings(JWT_SECRET=SECRET, API_PREFIX="/api/")
        self.assertEqual(s.API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SECRET, API_PREFIX="api")

    def test_log_level_normalized(self) -> None:
        s = _settings(JWT_SECRET=SECRET, LOG_LEVEL="debug")
        self.assertEqual(s.LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SECRET, LOG_LEVEL="chatty")

    def test_directory_url_must_be_http(self) -> None:
        s = _settings(JWT_SECRET=SECRET, USER_DIRECTORY_URL="https://dir.example.com/")
        self.assertEqual(s.USER_DIRECTORY_URL, "https://dir.example.com")
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET=SECRET, USER_DIRECTORY_URL="ftp://dir.example.com")


if __name__ == "__main__":
    unittest.main()
