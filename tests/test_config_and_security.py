"""Unit tests for settings validation, password hashing and JWT tokens."""

import unittest

import jwt
from pydantic import ValidationError

from devconsole.core.config import DEFAULT_DATABASE_URL, DEFAULT_JWT_SECRET, Settings
from devconsole.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

PROD_URL = "postgresql://console:pw@db.example.com:5432/console"


def _settings(**kwargs: object) -> Settings:
    """Settings from explicit values only (no .env file)."""
    return Settings(_env_file=None, **kwargs)


class TestSettingsValidation(unittest.TestCase):
    def test_rejects_non_postgres_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://localhost/console")

    def test_rejects_empty_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="  ")

    def test_rejects_out_of_range_activity_limit(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DASHBOARD_ACTIVITY_LIMIT=0)

    def test_prod_requires_explicit_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", DATABASE_URL=DEFAULT_DATABASE_URL, JWT_SECRET="s3cret")

    def test_prod_requires_explicit_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod", DATABASE_URL=PROD_URL, JWT_SECRET=DEFAULT_JWT_SECRET)

    def test_prod_with_explicit_values(self) -> None:
        s = _settings(APP_ENV="prod", DATABASE_URL=f" {PROD_URL} ", JWT_SECRET="s3cret")
        self.assertEqual(s.DATABASE_URL, PROD_URL)
        self.assertEqual(s.DASHBOARD_ACTIVITY_LIMIT, 20)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_verifies_and_is_salted(self) -> None:
        first = hash_password("correct-horse")
        second = hash_password("correct-horse")
        self.assertNotEqual(first, "correct-horse")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("correct-horse", first))
        self.assertFalse(verify_password("battery-staple", first))

    def test_malformed_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestAccessTokens(unittest.TestCase):
    def test_token_carries_subject_and_role(self) -> None:
        payload = decode_access_token(create_access_token(sub="user-1", role="developer"))
        self.assertEqual(payload["sub"], "user-1")
        self.assertEqual(payload["role"], "developer")

    def test_tampered_token_is_rejected(self) -> None:
        token = create_access_token(sub="user-1", role="user")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))


if __name__ == "__main__":
    unittest.main()
