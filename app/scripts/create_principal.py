"""
Create an admin or staff account (e.g. the first admin). Run from project root:
  python -m app.scripts.create_principal {admin|staff} NAME EMAIL PASSWORD [--inactive]
Example:
  python -m app.scripts.create_principal admin "Site Admin" admin@example.com 'S3cure-pass'
"""
import argparse
import logging
import sys

from app.core.database import session_scope
from app.core.security import EMAIL_MAX_LEN, PASSWORD_MAX_LEN, hash_password, password_strength_errors
from app.models import Admin, Staff
from app.services.guards import GuardName
from app.services.principals import email_in_use

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an admin or staff account (no registration UI).")
    parser.add_argument("guard", choices=[g.value for g in GuardName], help="Principal type")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Email, unique across admins and staffs")
    parser.add_argument("password", help="Password (8+ chars, upper, lower and digit)")
    parser.add_argument("--inactive", action="store_true", help="Create a staff account that cannot log in yet")
    args = parser.parse_args(argv)

    guard = GuardName(args.guard)
    name = args.name.strip()
    email = args.email.strip()
    if not name:
        print("Name must not be empty.", file=sys.stderr)
        return 1
    if not email or len(email) > EMAIL_MAX_LEN or "@" not in email:
        print("Invalid email.", file=sys.stderr)
        return 1
    if len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be at most {PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1
    weaknesses = password_strength_errors(args.password)
    if weaknesses:
        for message in weaknesses:
            print(message, file=sys.stderr)
        return 1
    if args.inactive and guard is not GuardName.STAFF:
        print("--inactive only applies to staff accounts.", file=sys.stderr)
        return 1

    with session_scope() as db:
        if email_in_use(db, email):
            print(f"Email '{email}' is already used by another account.", file=sys.stderr)
            return 1
        if guard is GuardName.ADMIN:
            principal = Admin(name=name, email=email, password_hash=hash_password(args.password))
        else:
            principal = Staff(
                name=name,
                email=email,
                password_hash=hash_password(args.password),
                is_active=not args.inactive,
            )
        db.add(principal)
        db.flush()
        principal_id = principal.id
    logger.info("Created %s account: id=%s email=%s", guard.value, principal_id, email)
    print(f"Created {guard.value} '{email}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
