"""Login and logout commands."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging

from fitrun.cli.context import open_runtime, run_command
from fitrun.session.state import end_session

logger = logging.getLogger(__name__)


def cmd_login(args: argparse.Namespace) -> int:
    """Exchange email/password for a token and persist it."""
    password = args.password or getpass.getpass("Password: ")

    async def _login() -> int:
        async with open_runtime() as runtime:
            token, profile_exists = await runtime.api.login(args.email, password)
            runtime.session.login(token, profile_exists)
        logger.info("Logged in as %s", args.email)
        print(f"Logged in as {args.email}")
        if not profile_exists:
            print("Your profile is incomplete; finish onboarding on the web app.")
        return 0

    return asyncio.run(run_command(_login))


def cmd_logout(args: argparse.Namespace) -> int:
    """Forget the stored credentials."""
    del args
    end_session()
    print("Logged out")
    return 0
