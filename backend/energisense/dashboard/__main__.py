"""
Terminal Dashboard
==================

    energisense-dashboard login --email admin@example.com --password password123
    energisense-dashboard watch              # refresh every 5s until Ctrl+C
    energisense-dashboard watch --once
    energisense-dashboard add-user --email op@example.com --password secret --role user
    energisense-dashboard logout

The session is kept in SESSION_FILE (default ~/.energisense/session.json).

Author: EnergiSense Team
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import httpx

from energisense.config import Config
from energisense.dashboard.client import EnergiSenseClient, LoginFailedError, SessionExpiredError
from energisense.dashboard.poller import DashboardPoller
from energisense.dashboard.session import SessionStore
from energisense.models import Role


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="energisense-dashboard",
        description="EnergiSense terminal dashboard.",
    )
    parser.add_argument("--url", default=Config.DATA_API_URL, help="API base URL")
    parser.add_argument("--session-file", type=Path, default=Config.SESSION_FILE)

    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and save the session")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)

    commands.add_parser("logout", help="Forget the saved session")

    watch = commands.add_parser("watch", help="Show the dashboard and keep it fresh")
    watch.add_argument("--interval", type=float, default=Config.DASHBOARD_REFRESH_INTERVAL)
    watch.add_argument("--once", action="store_true", help="Render once and exit")

    add_user = commands.add_parser("add-user", help="Create an account (admin session)")
    add_user.add_argument("--email", required=True)
    add_user.add_argument("--password", required=True)
    add_user.add_argument("--role", choices=[r.value for r in Role], default=Role.USER.value)

    return parser


async def _run(args: argparse.Namespace, store: SessionStore) -> int:
    client = EnergiSenseClient(args.url)
    try:
        if args.command == "login":
            try:
                session = await client.login(args.email, args.password)
            except LoginFailedError as e:
                print(f"Login failed: {e}")
                return 1
            store.save(session)
            print(f"Logged in as {session.email} ({session.role.value})")
            return 0

        session = store.load()

        if args.command == "add-user":
            try:
                result = await client.register_user(session, args.email, args.password, Role(args.role))
            except ValueError as e:
                print(f"Could not create user: {e}")
                return 1
            except SessionExpiredError as e:
                print(f"Not allowed: {e.detail}")
                return 1
            print(result.get("msg", "User created"))
            return 0

        # watch
        if session is None:
            print("Not logged in. Run: energisense-dashboard login --email ... --password ...")
            return 1

        poller = DashboardPoller(client, store, session, interval=args.interval)
        await poller.run(max_ticks=1 if args.once else None)
        return 0 if poller.active else 1

    except httpx.HTTPError as e:
        print(f"Cannot reach the API at {args.url}: {e}")
        return 1
    finally:
        await client.close()


def main(argv: Optional[list[str]] = None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING,
        format='[%(asctime)s] %(message)s',
        datefmt='%H:%M:%S',
    )
    store = SessionStore(args.session_file)

    if args.command == "logout":
        store.clear()
        print("Logged out")
        return

    try:
        exit_code = asyncio.run(_run(args, store))
    except KeyboardInterrupt:
        print()
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
