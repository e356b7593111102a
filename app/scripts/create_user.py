"""
Create a staff account (e.g. the first Superadmin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD NAME [admin|superadmin]
Example:
  python -m app.scripts.create_user owner@example.com your-secure-password "Site Owner" superadmin
"""
import argparse
import sys

from app.core.authorization import Role
from app.core.config import get_settings
from app.core.database import Database
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from app.models.user import User
from app.services.registration import EMAIL_RE, normalize_email


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Create a staff account without a registration token."
    )
    parser.add_argument("email", help="Account email")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument(
        "role", nargs="?", default="superadmin", choices=["admin", "superadmin"]
    )
    args = parser.parse_args()

    email = normalize_email(args.email)
    if not EMAIL_RE.match(email):
        print("Invalid email format.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    name = args.name.strip()
    if not name:
        print("Name must not be empty.", file=sys.stderr)
        return 1
    role = Role[args.role.upper()]

    database = Database(get_settings().DATABASE_URL)
    db = database.session()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            email=email,
            password_hash=hash_password(args.password),
            name=name,
            role=int(role),
        )
        db.add(user)
        db.commit()
        print(f"Created user '{email}' with role '{role.name.lower()}'.")
        return 0
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
