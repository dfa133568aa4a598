"""Unit tests for app.services.login_attempts: SQL recorder and best-effort wrapper."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from app.models import LoginAttempt
from app.schemas.login_attempt import LoginAttemptRecord
from app.services.login_attempts import (
    RecordingFailure,
    SqlLoginAttemptRecorder,
    record_attempt,
    request_context,
)


def _attempt(**kwargs: object) -> LoginAttemptRecord:
    """Build a failed LoginAttemptRecord for tests."""
    defaults = {
        "email": "a@x.com",
        "ip_address": "127.0.0.1",
        "user_agent": "unittest",
        "guard": "admin",
        "successful": False,
        "failure_reason": "bad_password",
    }
    defaults.update(kwargs)
    return LoginAttemptRecord(**defaults)


class TestSqlLoginAttemptRecorder(unittest.TestCase):
    """SqlLoginAttemptRecorder inserts one row and commits."""

    def test_inserts_row(self) -> None:
        db = MagicMock()
        attempt = _attempt()
        SqlLoginAttemptRecorder(db).record(attempt)
        db.add.assert_called_once()
        row = db.add.call_args.args[0]
        self.assertIsInstance(row, LoginAttempt)
        self.assertEqual(row.email, "a@x.com")
        self.assertEqual(row.guard, "admin")
        self.assertFalse(row.successful)
        self.assertEqual(row.failure_reason, "bad_password")
        self.assertEqual(row.created_at, attempt.timestamp)
        db.commit.assert_called_once()

    def test_database_error_rolls_back_and_raises(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))
        with self.assertRaises(RecordingFailure):
            SqlLoginAttemptRecorder(db).record(_attempt())
        db.rollback.assert_called_once()


class TestRecordAttempt(unittest.TestCase):
    """record_attempt never propagates recorder errors."""

    def test_success_returns_true(self) -> None:
        recorder = MagicMock()
        self.assertTrue(record_attempt(recorder, _attempt()))
        recorder.record.assert_called_once()

    def test_failure_logged_and_swallowed(self) -> None:
        recorder = MagicMock()
        recorder.record.side_effect = RecordingFailure("db down")
        with self.assertLogs("app.services.login_attempts", level="ERROR") as logs:
            self.assertFalse(record_attempt(recorder, _attempt()))
        self.assertIn("not recorded", logs.output[0])


class TestLoginAttemptRecord(unittest.TestCase):
    """Audit records are immutable once built."""

    def test_frozen(self) -> None:
        attempt = _attempt()
        with self.assertRaises(Exception):
            attempt.successful = True


class TestRequestContext(unittest.TestCase):
    """request_context normalizes client metadata."""

    def test_missing_client(self) -> None:
        context = request_context(None, None)
        self.assertEqual(context.ip_address, "unknown")
        self.assertIsNone(context.user_agent)

    def test_truncates_user_agent(self) -> None:
        context = request_context("10.0.0.1", "x" * 1000)
        self.assertEqual(context.ip_address, "10.0.0.1")
        self.assertEqual(len(context.user_agent), 255)


if __name__ == "__main__":
    unittest.main()
