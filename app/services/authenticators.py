"""Per-guard authenticator strategies tried by the unified login in priority order.

Each authenticator owns one principal table. It returns the authenticated principal
or an internal failure reason; the reason is only ever written to the audit trail.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

from sqlalchemy.orm import Session

from app.core.security import burn_password_check, verify_password
from app.services.guards import GuardName
from app.services.principals import find_admin_by_email, find_staff_by_email

# Symbolic route names resolved by the calling layer.
ADMIN_DESTINATION = "admin-dashboard"
STAFF_DESTINATION = "staff-profile"


class FailureReason(str, Enum):
    """Internal classification of a failed attempt (audit only)."""

    NOT_FOUND = "not_found"
    BAD_PASSWORD = "bad_password"
    INACTIVE = "inactive"
    # The credential store raised before a decision was reached
    ERROR = "error"


class Principal(Protocol):
    """Anything that can authenticate: an admin or staff row."""

    id: Any
    email: Any
    password_hash: Any


AuthResult = tuple[Principal | None, FailureReason | None]


class Authenticator:
    """
    Strategy for one guard: look up by exact email, check preconditions, verify password.

    lookup is any callable mapping an email to a principal or None, so the same
    strategy works against the ORM session or an in-memory table.
    """

    guard: GuardName
    destination: str

    def __init__(self, lookup: Callable[[str], Principal | None]) -> None:
        self._lookup = lookup

    def lookup(self, email: str) -> Principal | None:
        return self._lookup(email)

    def precondition_failure(self, principal: Principal) -> FailureReason | None:
        """Reason the principal may not log in regardless of password; None if allowed."""
        return None

    def authenticate(self, email: str, password: str) -> AuthResult:
        principal = self.lookup(email)
        if principal is None:
            burn_password_check(password)
            return None, FailureReason.NOT_FOUND
        blocked = self.precondition_failure(principal)
        if blocked is not None:
            burn_password_check(password)
            return None, blocked
        if not verify_password(password, principal.password_hash):
            return None, FailureReason.BAD_PASSWORD
        return principal, None


class AdminAuthenticator(Authenticator):
    guard = GuardName.ADMIN
    destination = ADMIN_DESTINATION


class StaffAuthenticator(Authenticator):
    """Staff may only log in while is_active is true."""

    guard = GuardName.STAFF
    destination = STAFF_DESTINATION

    def precondition_failure(self, principal: Principal) -> FailureReason | None:
        if not getattr(principal, "is_active", False):
            return FailureReason.INACTIVE
        return None


def build_authenticators(db: Session) -> list[Authenticator]:
    """Authenticators backed by the database, admin first."""
    return [
        AdminAuthenticator(lambda email: find_admin_by_email(db, email)),
        StaffAuthenticator(lambda email: find_staff_by_email(db, email)),
    ]
