"""Unit tests for app.services.authenticators and the principal lookups they are built on."""

import unittest
from unittest.mock import MagicMock, patch

import bcrypt

from app.models import Admin, Staff
from app.services.authenticators import (
    AdminAuthenticator,
    FailureReason,
    StaffAuthenticator,
    build_authenticators,
)
from app.services.guards import GuardName
from app.services.principals import email_in_use


def _hash(password: str) -> str:
    """Low-cost bcrypt hash for tests."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


class TestAdminAuthenticator(unittest.TestCase):
    """AdminAuthenticator returns the admin or a reason."""

    def setUp(self) -> None:
        self.admin = Admin(id=1, name="A", email="a@x.com", password_hash=_hash("Secret1"))
        self.authenticator = AdminAuthenticator({"a@x.com": self.admin}.get)

    def test_success(self) -> None:
        self.assertEqual(self.authenticator.authenticate("a@x.com", "Secret1"), (self.admin, None))

    def test_bad_password(self) -> None:
        self.assertEqual(
            self.authenticator.authenticate("a@x.com", "Secret2"),
            (None, FailureReason.BAD_PASSWORD),
        )

    def test_not_found_burns_a_check(self) -> None:
        with patch("app.services.authenticators.burn_password_check") as burn:
            result = self.authenticator.authenticate("b@x.com", "Secret1")
        self.assertEqual(result, (None, FailureReason.NOT_FOUND))
        burn.assert_called_once_with("Secret1")

    def test_exact_email_match(self) -> None:
        with patch("app.services.authenticators.burn_password_check"):
            result = self.authenticator.authenticate("A@X.COM", "Secret1")
        self.assertEqual(result, (None, FailureReason.NOT_FOUND))


class TestStaffAuthenticator(unittest.TestCase):
    """StaffAuthenticator refuses inactive staff without checking the password."""

    def test_inactive_skips_password_verification(self) -> None:
        staff = Staff(id=2, name="S", email="s@x.com", password_hash=_hash("Secret2"), is_active=False)
        authenticator = StaffAuthenticator({"s@x.com": staff}.get)
        with patch("app.services.authenticators.verify_password") as verify, patch(
            "app.services.authenticators.burn_password_check"
        ):
            result = authenticator.authenticate("s@x.com", "Secret2")
        self.assertEqual(result, (None, FailureReason.INACTIVE))
        verify.assert_not_called()

    def test_active_staff(self) -> None:
        staff = Staff(id=2, name="S", email="s@x.com", password_hash=_hash("Secret2"), is_active=True)
        authenticator = StaffAuthenticator({"s@x.com": staff}.get)
        self.assertEqual(authenticator.authenticate("s@x.com", "Secret2"), (staff, None))


class TestBuildAuthenticators(unittest.TestCase):
    """build_authenticators returns admin first, then staff, both querying the session."""

    def test_priority_order(self) -> None:
        db = MagicMock()
        authenticators = build_authenticators(db)
        self.assertEqual([a.guard for a in authenticators], [GuardName.ADMIN, GuardName.STAFF])

    def test_lookups_use_session(self) -> None:
        db = MagicMock()
        admin = Admin(id=1, name="A", email="a@x.com", password_hash="x")
        db.query.return_value.filter.return_value.first.return_value = admin
        admin_authenticator, _ = build_authenticators(db)
        self.assertIs(admin_authenticator.lookup("a@x.com"), admin)
        db.query.assert_called_once_with(Admin)


class TestEmailInUse(unittest.TestCase):
    """email_in_use checks both principal tables."""

    def test_free_email(self) -> None:
        db = MagicMock()
        db.query.return_value.filter.return_value.first.return_value = None
        self.assertFalse(email_in_use(db, "new@x.com"))
        self.assertEqual([c.args[0] for c in db.query.call_args_list], [Admin, Staff])

    def test_taken_in_staff_table(self) -> None:
        db = MagicMock()
        admin_query = MagicMock()
        admin_query.filter.return_value.first.return_value = None
        staff_query = MagicMock()
        staff_query.filter.return_value.first.return_value = object()
        db.query.side_effect = [admin_query, staff_query]
        self.assertTrue(email_in_use(db, "s@x.com"))

    def test_ignore_row_adds_filter(self) -> None:
        db = MagicMock()
        query = db.query.return_value
        query.filter.return_value.filter.return_value.first.return_value = None
        query.filter.return_value.first.return_value = None
        self.assertFalse(email_in_use(db, "s@x.com", ignore_guard=GuardName.STAFF, ignore_id=2))
        query.filter.return_value.filter.assert_called_once()


if __name__ == "__main__":
    unittest.main()
