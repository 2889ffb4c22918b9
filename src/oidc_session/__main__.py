#!/usr/bin/env python3
"""
Command-line helpers for inspecting and revoking stored sessions.
"""

import argparse
import asyncio
import json
import logging
import sys

from .config import SessionSettings, load_session_settings
from .exceptions import SessionError
from .session_id import derive_session_id, is_valid_session_id
from .session_storage import SessionStore, create_session_store
from .user_session import UserSessionManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and manage OIDC user sessions")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subcommands = parser.add_subparsers(dest="command", required=True)

    derive = subcommands.add_parser("derive", help="Print the session id for a subject claim")
    derive.add_argument("subject")

    validate = subcommands.add_parser("validate", help="Check whether a session id is well formed")
    validate.add_argument("session_id")

    show = subcommands.add_parser("show", help="Print the stored token bundle for a session id")
    show.add_argument("session_id")

    destroy = subcommands.add_parser("destroy", help="Remove a stored session")
    destroy.add_argument("session_id")

    return parser


async def _run_store_command(args: argparse.Namespace, store: SessionStore, settings: SessionSettings) -> int:
    manager = UserSessionManager(store, namespace=settings.id_namespace)
    try:
        if args.command == "show":
            record = await manager.get_user_session(args.session_id)
            print(json.dumps(record.to_dict(), indent=2, sort_keys=True))
        else:
            await manager.destroy_user_session(args.session_id)
            print(f"Destroyed session {args.session_id}")
        return 0
    finally:
        await store.close()


def main(argv=None) -> int:
    """Run the session command-line interface."""
    args = build_parser().parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger = logging.getLogger("oidc_session")
    settings = load_session_settings()

    try:
        if args.command == "derive":
            print(derive_session_id(args.subject, settings.id_namespace))
            return 0

        if args.command == "validate":
            valid = is_valid_session_id(args.session_id)
            print("valid" if valid else "invalid")
            return 0 if valid else 1

        # The store factory probes Redis on its own event loop
        store = create_session_store(settings=settings)
        return asyncio.run(_run_store_command(args, store, settings))
    except SessionError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
