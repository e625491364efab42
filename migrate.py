#!/usr/bin/env python3
"""
Database migrations with Alembic.

    python migrate.py create "message"   # autogenerate a revision
    python migrate.py upgrade            # apply pending revisions
    python migrate.py downgrade          # roll back the last revision
    python migrate.py history
    python migrate.py current
"""
import argparse
from pathlib import Path

from alembic.config import Config
from alembic import command
from sellersync.core.config import settings

root_dir = Path(__file__).parent


def get_alembic_config():
    alembic_cfg = Config(str(root_dir / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(root_dir / "migrations"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return alembic_cfg


def create_migration(message: str):
    command.revision(get_alembic_config(), autogenerate=True, message=message)
    print(f"Migration created: {message}")


def run_migrations():
    command.upgrade(get_alembic_config(), "head")
    print("Migrations applied")


def rollback_migration():
    command.downgrade(get_alembic_config(), "-1")
    print("Rolled back one revision")


def show_history():
    command.history(get_alembic_config())


def show_current():
    command.current(get_alembic_config())


def main():
    parser = argparse.ArgumentParser(description="Manage SellerSync database migrations")
    parser.add_argument("action", choices=["create", "upgrade", "downgrade", "history", "current"])
    parser.add_argument("message", nargs="?", help="Revision message (create only)")
    args = parser.parse_args()

    if args.action == "create":
        if not args.message:
            parser.error("create requires a revision message")
        create_migration(args.message)
    elif args.action == "upgrade":
        run_migrations()
    elif args.action == "downgrade":
        rollback_migration()
    elif args.action == "history":
        show_history()
    else:
        show_current()


if __name__ == "__main__":
    main()
