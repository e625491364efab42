"""
Create the ``admin`` user, or reset its password if it already exists.

Tables are created first when missing, so this also works against a fresh
database:

    python scripts/setup_admin.py --password 'S3cret!'

Without ``--password`` the password is prompted for.
"""

import argparse
import getpass

from sellersync.database.database import Base, SessionLocal, engine
from sellersync.modules.auth.service import AuthService
import sellersync.modules.auth.models
import sellersync.modules.sellers.models
import sellersync.modules.stock.models
import sellersync.modules.sales.models
import sellersync.modules.payments.models
import sellersync.modules.exhibitions.models


def main():
    parser = argparse.ArgumentParser(description="Create or reset the admin user")
    parser.add_argument("--password", default=None)
    parser.add_argument("--full-name", default="Administrator")
    parser.add_argument("--email", default=None)
    args = parser.parse_args()

    password = args.password or getpass.getpass("Admin password: ")
    if len(password) < 6:
        parser.error("password must be at least 6 characters")

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        user = AuthService(db).ensure_admin(password, full_name=args.full_name, email=args.email)
        print("Admin user ready.")
        print(f"  Username: {user.username}")
        print(f"  Role:     {user.role}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
