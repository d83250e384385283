#!/usr/bin/env python3
"""
Create Admin User Script.

Creates (or promotes) an admin user record. Useful for initial setup when
no admin exists yet.

Two modes:
  - ``--uid``: the sign-in account already exists at the identity
    provider; only the user record is written.
  - ``--password``: a sign-in account is provisioned through the identity
    provider admin API first, then the user record is written.

Usage:
    uv run python auto/create_admin.py --email admin@example.com --uid Xb3kPq9sTzW1
    uv run python auto/create_admin.py --email admin@example.com --password Secret123

Environment Variables:
    ADMIN_EMAIL: Admin email (default: admin@example.com)
    ADMIN_DISPLAY_NAME: Display name (default: Admin User)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from os import environ
from pathlib import Path
from secrets import token_urlsafe
from sys import exit as sys_exit
from sys import path as sys_path
from traceback import print_exc

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys_path.insert(0, str(project_root))

from cms.configs import settings  # noqa: E402
from cms.db import init_db, transaction  # noqa: E402
from cms.errors import BaseAppError  # noqa: E402
from cms.models import UserDB  # noqa: E402
from cms.rbac import Role, get_role_permissions  # noqa: E402
from cms.repositories import UserRepository  # noqa: E402
from cms.services import ServiceContainer  # noqa: E402
from cms.utils import utcnow  # noqa: E402


@dataclass(frozen=True)
class AdminUserData:
    """
    Admin user creation data.

    Attributes
    ----------
    email : str
        Admin email address.
    display_name : str
        Admin display name.
    uid : str | None
        Existing identity account uid.
    password : str | None
        Password for a newly provisioned identity account.
    """

    email: str
    display_name: str
    uid: str | None = None
    password: str | None = None


def generate_secure_password(length: int = 16) -> str:
    """Generate a random password for a new identity account."""
    password = token_urlsafe(length)
    return f"Admin{password[:12]}!1"


def display_success(admin: UserDB, password: str | None, show_password: bool) -> None:
    """Print the created admin's details."""
    print("\n✅ Admin user ready!")
    print(f"   UID:    {admin.uid}")
    print(f"   Email:  {admin.email}")
    print(f"   Role:   {admin.role}")
    print(f"   Active: {admin.active}")
    if password and show_password:
        print(f"   Password: {password}")
        print("\n⚠️  Save this password now! You won't see it again.")


async def create_admin_user(admin_data: AdminUserData) -> UserDB:
    """
    Write the admin user record, provisioning the identity account if needed.

    An existing record with the same uid is promoted to admin and
    re-activated.

    Raises
    ------
    ValueError
        If the email already belongs to a different user.
    """
    services = ServiceContainer.from_settings(settings)
    try:
        await init_db(services.engine)

        uid = admin_data.uid
        if uid is None and admin_data.password is not None:
            uid = await services.identity.create_account(
                admin_data.email,
                admin_data.password,
                admin_data.display_name,
            )

        if uid is None:
            msg = "Either a uid or a password is required"
            raise ValueError(msg)

        async with transaction(services.session_maker) as session:
            users = UserRepository(session)
            if await users.email_taken(admin_data.email, exclude_uid=uid):
                msg = f"User with email '{admin_data.email}' already exists"
                raise ValueError(msg)

            permissions = get_role_permissions(Role.ADMIN)
            existing = await users.get_by_id(uid)
            if existing is not None:
                existing.role = Role.ADMIN
                existing.permissions = permissions
                existing.active = True
                existing.updated_at = utcnow()
                return await users.save(existing)

            now = utcnow()
            return await users.add(
                UserDB(
                    uid=uid,
                    email=admin_data.email,
                    display_name=admin_data.display_name,
                    role=Role.ADMIN,
                    permissions=permissions,
                    active=True,
                    bio="System Administrator",
                    expertise=["Administration"],
                    created_at=now,
                    join_date=now,
                ),
            )
    finally:
        await services.aclose()


def parse_args() -> Namespace:
    """Parse command line arguments."""
    parser = ArgumentParser(
        description="Create or promote an admin user.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Existing identity account
  uv run python auto/create_admin.py -e admin@mysite.com --uid Xb3kPq9sTzW1

  # Provision a new identity account with a generated password
  uv run python auto/create_admin.py -e admin@mysite.com --generate-password -s
        """,
    )

    parser.add_argument(
        "-e",
        "--email",
        default=environ.get("ADMIN_EMAIL", "admin@example.com"),
        help="Admin email (default: admin@example.com or ADMIN_EMAIL env var)",
    )
    parser.add_argument(
        "-n",
        "--display-name",
        default=environ.get("ADMIN_DISPLAY_NAME", "Admin User"),
        help="Display name (default: Admin User or ADMIN_DISPLAY_NAME env var)",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--uid", help="uid of an existing identity account")
    source.add_argument("-p", "--password", help="Password for a new identity account")
    source.add_argument(
        "--generate-password",
        action="store_true",
        help="Provision a new identity account with a generated password",
    )
    parser.add_argument(
        "--show-password",
        "-s",
        action="store_true",
        help="Show the password in output (use with caution)",
    )

    return parser.parse_args()


async def main() -> int:
    """
    Run the admin creation process.

    Returns
    -------
    int
        Exit code (0 for success, 1 for error).
    """
    args = parse_args()
    password = generate_secure_password() if args.generate_password else args.password
    admin_data = AdminUserData(
        email=args.email.strip().lower(),
        display_name=args.display_name,
        uid=args.uid,
        password=password,
    )

    try:
        admin = await create_admin_user(admin_data)
    except (ValueError, BaseAppError) as e:
        print(f"\n❌ Error: {e}")
        return 1
    except Exception as e:  # noqa: BLE001
        print(f"\n❌ Unexpected error: {e}")
        print_exc()
        return 1

    display_success(admin, password, args.show_password or args.generate_password)
    return 0


if __name__ == "__main__":
    exit_code = asyncio_run(main())
    sys_exit(exit_code)
