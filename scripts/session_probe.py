"""
Name: Session Probe Script

Responsibilities:
  - Log in against a running backend
  - Print the identity, the entitlement snapshot and the visible navigation
  - Log out again (unless --keep-session)
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import os
import sys
from dataclasses import asdict

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from leavemarker.container import build_container  # noqa: E402
from leavemarker.crosscutting.config import Settings  # noqa: E402
from leavemarker.crosscutting.exceptions import AuthenticationFailedError  # noqa: E402


def _parse_args() -> argparse.Namespace:
    argv = sys.argv[1:]
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Log in and print session, entitlements and navigation."
    )
    parser.add_argument("--email", help="Account email")
    parser.add_argument(
        "--password",
        help="Account password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--api-base-url",
        help="Backend API root (default: LEAVEMARKER_API_BASE_URL or localhost)",
    )
    parser.add_argument(
        "--auth-mode",
        choices=["cookie", "token"],
        help="Credential transport (default: cookie)",
    )
    parser.add_argument(
        "--keep-session",
        action="store_true",
        help="Do not log out at the end",
    )
    return parser.parse_args(argv)


def _prompt_email() -> str:
    email = input("Email: ").strip()
    if not email:
        raise SystemExit("Email is required.")
    return email


def _build_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.api_base_url:
        overrides["api_base_url"] = args.api_base_url
    if args.auth_mode:
        overrides["auth_mode"] = args.auth_mode
    return Settings(**overrides)


async def _probe(args: argparse.Namespace, email: str, password: str) -> int:
    async with build_container(_build_settings(args)) as container:
        try:
            identity = await container.session.login(email, password)
        except AuthenticationFailedError as exc:
            print(f"Login failed: {exc.message}", file=sys.stderr)
            return 1

        snapshot = container.entitlements.effective
        report = {
            "identity": identity.to_payload(),
            "entitlements": {
                **asdict(snapshot),
                "tier": snapshot.tier.value,
                "enabled_features": sorted(f.value for f in snapshot.enabled_features),
            },
            "navigation": [
                {"name": entry.name, "href": entry.href}
                for entry in container.visible_navigation()
            ],
        }
        print(json.dumps(report, indent=2))

        if not args.keep_session:
            await container.session.logout()
    return 0


def main() -> None:
    args = _parse_args()
    email = args.email or _prompt_email()
    password = args.password or getpass.getpass("Password: ")
    raise SystemExit(asyncio.run(_probe(args, email, password)))


if __name__ == "__main__":
    main()
