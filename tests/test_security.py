"""Unit tests for app.core.security password helpers and app.core.messages."""

import unittest
from unittest.mock import patch

import bcrypt

from app.core.messages import auth_failed_message, too_many_attempts_message
from app.core.security import (
    burn_password_check,
    password_strength_errors,
    verify_password,
)


def _hash(password: str) -> str:
    """Low-cost bcrypt hash for tests."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


class TestVerifyPassword(unittest.TestCase):
    """verify_password compares against bcrypt hashes and never raises."""

    def test_correct_password(self) -> None:
        self.assertTrue(verify_password("Secret1", _hash("Secret1")))

    def test_wrong_password(self) -> None:
        self.assertFalse(verify_password("secret1", _hash("Secret1")))

    def test_malformed_hash_is_false(self) -> None:
        self.assertFalse(verify_password("Secret1", "not-a-bcrypt-hash"))


class TestBurnPasswordCheck(unittest.TestCase):
    """burn_password_check spends one verification and returns nothing."""

    def test_runs_a_verification(self) -> None:
        with patch("app.core.security.verify_password") as verify:
            burn_password_check("whatever")
        verify.assert_called_once()
        self.assertEqual(verify.call_args.args[0], "whatever")


class TestPasswordStrength(unittest.TestCase):
    """password_strength_errors enforces length, case mix and digits."""

    def test_strong_password(self) -> None:
        self.assertEqual(password_strength_errors("Secret123"), [])

    def test_too_short_reports_only_length(self) -> None:
        errors = password_strength_errors("Ab1")
        self.assertEqual(len(errors), 1)
        self.assertIn("at least 8", errors[0])

    def test_missing_classes(self) -> None:
        errors = password_strength_errors("alllowercase")
        self.assertEqual(len(errors), 2)

    def test_special_character_optional(self) -> None:
        self.assertEqual(password_strength_errors("Secret123"), [])
        self.assertEqual(len(password_strength_errors("Secret123", require_special=True)), 1)
        self.assertEqual(password_strength_errors("Secret123!", require_special=True), [])


class TestMessages(unittest.TestCase):
    """Localized login messages."""

    def test_indonesian(self) -> None:
        self.assertEqual(
            auth_failed_message("id"),
            "Email atau password yang Anda masukkan salah.",
        )

    def test_unknown_locale_falls_back_to_english(self) -> None:
        self.assertEqual(auth_failed_message("fr"), auth_failed_message("en"))

    def test_too_many_attempts_has_seconds(self) -> None:
        self.assertIn("42", too_many_attempts_message("en", 42))


if __name__ == "__main__":
    unittest.main()
