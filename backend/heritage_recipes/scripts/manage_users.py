# heritage_recipes/scripts/manage_users.py
# User admin from the shell
#   python -m heritage_recipes.scripts.manage_users list
#   python -m heritage_recipes.scripts.manage_users create --name N --email E --password P
#   python -m heritage_recipes.scripts.manage_users seed-test-user
#   python -m heritage_recipes.scripts.manage_users delete --email E

from __future__ import annotations
import argparse
import asyncio
import sys
from typing import List, Optional

from heritage_recipes.core.config import get_settings
from heritage_recipes.core.errors import RecipeAppError
from heritage_recipes.core.log_config import configure_logging
from heritage_recipes.core.security import PasswordHasher, TokenCodec
from heritage_recipes.db.indexes import ensure_user_indexes
from heritage_recipes.db.init import MongoConnection
from heritage_recipes.db.users import CredentialStore
from heritage_recipes.services.auth import AuthService
from heritage_recipes.services.utils import normalize_email

TEST_NAME = "Test User"
TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "test1234"

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="manage_users", description="Manage recipe API users")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("create", help="create a user")
    c.add_argument("--name", required=True)
    c.add_argument("--email", required=True)
    c.add_argument("--password", required=True)

    sub.add_parser("seed-test-user", help=f"create {TEST_EMAIL} / {TEST_PASSWORD} if missing")
    sub.add_parser("list", help="list users (no credentials)")

    d = sub.add_parser("delete", help="delete a user by email")
    d.add_argument("--email", required=True)
    return p

async def run(args: argparse.Namespace, db) -> int:
    settings = get_settings()
    users = CredentialStore(db)
    auth = AuthService(users, PasswordHasher(settings.BCRYPT_ROUNDS), TokenCodec(settings.JWT_SECRET))

    if args.command == "list":
        docs = await users.list_users()
        if not docs:
            print("No users found")
        for d in docs:
            n_fav = len(d.get("favorites") or [])
            print(f"- {d['_id']}  {d.get('name', '')} <{d.get('email', '')}>  favorites={n_fav}")
        return 0

    if args.command == "delete":
        email = normalize_email(args.email)
        if await users.delete_by_email(email):
            print(f"Deleted {email}")
            return 0
        print(f"No user with email {email}")
        return 1

    if args.command == "seed-test-user":
        name, email, password = TEST_NAME, TEST_EMAIL, TEST_PASSWORD
        if await users.find_by_email(email) is not None:
            print(f"Test user {email} already exists")
            return 0
    else:
        name, email, password = args.name, args.email, args.password

    try:
        user, _ = await auth.register(name, email, password)
    except RecipeAppError as e:
        print(f"Error: {e.message}")
        return 1
    print(f"Created user {user['email']} (id={user['id']})")
    return 0

async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    mongo = MongoConnection(settings.MONGO_URI, settings.MONGO_DB)
    try:
        db = await mongo.connect(retries=3)
    except RuntimeError as e:
        print(f"Error connecting to MongoDB: {e}")
        return 2
    try:
        await ensure_user_indexes(db)
        return await run(args, db)
    finally:
        mongo.close()

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
