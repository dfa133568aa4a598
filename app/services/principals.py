"""Credential store lookups for admin and staff principals."""

from sqlalchemy.orm import Session

from app.models import Admin, Staff
from app.services.guards import GuardName

_MODELS_BY_GUARD: dict[GuardName, type[Admin] | type[Staff]] = {
    GuardName.ADMIN: Admin,
    GuardName.STAFF: Staff,
}


def find_admin_by_email(db: Session, email: str) -> Admin | None:
    """Exact email match in the admins table."""
    return db.query(Admin).filter(Admin.email == email).first()


def find_staff_by_email(db: Session, email: str) -> Staff | None:
    """Exact email match in the staffs table (active or not)."""
    return db.query(Staff).filter(Staff.email == email).first()


def get_admin(db: Session, admin_id: int) -> Admin | None:
    return db.query(Admin).filter(Admin.id == admin_id).first()


def get_staff(db: Session, staff_id: int) -> Staff | None:
    return db.query(Staff).filter(Staff.id == staff_id).first()


def email_in_use(
    db: Session,
    email: str,
    ignore_guard: GuardName | None = None,
    ignore_id: int | None = None,
) -> bool:
    """
    True if email exists in either principal table.

    Write-time rule only: the database does not enforce uniqueness across both
    tables, so login still resolves duplicates by guard priority. Pass ignore_guard
    and ignore_id to exclude the row being updated.
    """
    for guard, model in _MODELS_BY_GUARD.items():
        query = db.query(model).filter(model.email == email)
        if ignore_guard is guard and ignore_id is not None:
            query = query.filter(model.id != ignore_id)
        if query.first() is not None:
            return True
    return False
