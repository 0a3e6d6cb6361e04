#!/usr/bin/env python3
"""
Issue a session token for a user of the Service Booking API.

The user is created (or updated) in the database configured by
``DATABASE_URL`` and a signed session token is printed.  Send it as
``Authorization: Bearer <token>`` or in the session cookie.

Usage:
    python create_token.py --open-id owner-1 --name "Shop Owner" --admin
    python create_token.py --open-id customer-7 --days 30
"""

import argparse
import asyncio

from service_booking_api.app.core.db import init_db
from service_booking_api.app.core.security import create_session_token
from service_booking_api.app.schemas.user import ADMIN_ROLE
from service_booking_api.app.services.user_service import UserService


async def issue_token(args: argparse.Namespace) -> str:
    init_db()
    user = await UserService.upsert_user(
        open_id=args.open_id,
        name=args.name,
        email=args.email,
        login_method="token",
        role=ADMIN_ROLE if args.admin else None,
    )
    return create_session_token(user.open_id, expires_delta=args.days * 24 * 60 * 60, name=user.name or "")


def main():
    ap = argparse.ArgumentParser(description="Issue a session token for a Service Booking API user.")
    ap.add_argument("--open-id", required=True, help="External identity of the user")
    ap.add_argument("--name", help="Display name")
    ap.add_argument("--email", help="E-mail address")
    ap.add_argument("--admin", action="store_true", help="Grant the admin role")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days (default: 365)")
    args = ap.parse_args()

    print(asyncio.run(issue_token(args)))


if __name__ == "__main__":
    main()
