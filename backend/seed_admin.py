"""
Seed Script for Staff Accounts
Creates the report store tables if needed and upserts a login account.
Running it again resets the password, role and active flag.

Usage:
    python seed_admin.py [--username admin] [--password admin123] [--role ADMIN]
"""

import argparse
import logging

from config import settings
from database import SessionLocal, init_db
from models.user import UserRole
from services.auth_service import auth_service

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="Create or reset a staff account")

    parser.add_argument("--username", default="admin", help="Account username")
    parser.add_argument("--password", default="admin123", help="Account password")
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[role.value for role in UserRole],
        help="Role carried in issued tokens",
    )

    return parser.parse_args(argv)


def seed_user(username: str, password: str, role: str):
    init_db()
    db = SessionLocal()
    try:
        user = auth_service.upsert_user(db, username, password, role)
        logger.info(f"✅ Seeded user: {user.username} ({user.role})")
        return user
    finally:
        db.close()


def main(argv=None):
    args = parse_arguments(argv)
    seed_user(args.username, args.password, args.role)


if __name__ == "__main__":
    main()
