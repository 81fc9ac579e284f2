"""Script to create the initial admin account (and optional demo users)

Usage:
    python seed_database.py --email admin@example.com --password 's3cret!'
    python seed_database.py --demo        # also add a demo manager and buyer

The admin password may also come from SEED_ADMIN_PASSWORD.
"""
import argparse
import asyncio
import os

from config import load_settings
from core.context import AppContext
from core.errors import DuplicateAccount
from db import init_db
from db_models.user import User, UserRole, UserStatus
from api.users import db_manager as users_db

DEMO_USERS = [
    ("Demo Manager", "manager@garments.local", "managerpass", UserRole.MANAGER.value),
    ("Demo Buyer", "buyer@garments.local", "buyerpass", UserRole.BUYER.value),
]


async def create_admin(context: AppContext, name: str, email: str, password: str) -> None:
    """Insert an admin directly; registration never grants the admin role."""
    async with context.session_factory() as session:
        existing = await users_db.find_by_email(session, email)
        if existing is not None:
            print(f"[SKIP] {existing.email} already exists (role: {existing.role})")
            return

        user = User(
            name=name,
            email=users_db.normalize_email(email),
            hashed_password=context.hasher.hash(password),
            role=UserRole.ADMIN.value,
            status=UserStatus.ACTIVE.value,
        )
        session.add(user)
        await session.commit()
        print(f"[OK] Admin created: {user.email}")


async def create_demo_users(context: AppContext) -> None:
    async with context.session_factory() as session:
        for name, email, password, role in DEMO_USERS:
            try:
                await users_db.register(
                    session, context.hasher, name=name, email=email, password=password, role=role
                )
                print(f"  Added: {email} ({role})")
            except DuplicateAccount:
                print(f"  Exists: {email}")


async def main(args: argparse.Namespace) -> None:
    context = AppContext.from_settings(load_settings(args.mode))
    try:
        print("Creating database tables...")
        await init_db(context.engine)
        print("[OK] Tables ready")

        await create_admin(context, args.name, args.email, args.password)
        if args.demo:
            await create_demo_users(context)
    finally:
        await context.dispose()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the garments tracker database")
    parser.add_argument("--mode", default=None, help="Settings mode (local, stage, prod, test)")
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--email", default=os.environ.get("SEED_ADMIN_EMAIL", "admin@garments.local"))
    parser.add_argument("--password", default=os.environ.get("SEED_ADMIN_PASSWORD"))
    parser.add_argument("--demo", action="store_true", help="Also create a demo manager and buyer")
    args = parser.parse_args()
    if not args.password:
        parser.error("--password or SEED_ADMIN_PASSWORD is required")
    return args


if __name__ == "__main__":
    print("=" * 60)
    print("DATABASE SEEDING SCRIPT")
    print("=" * 60)
    asyncio.run(main(parse_args()))
