"""Command-line administration for nutrilog.

Usage:
    nutrilog create-user <username>
    nutrilog purge-sessions [--max-age-days N]
"""

from __future__ import annotations

import argparse
import getpass
import logging
from collections.abc import Callable, Sequence

from nutrilog.app_logging import configure_logging
from nutrilog.containers import AppContainer, build_container
from nutrilog.domain.errors import NutrilogError

_logger = logging.getLogger(__name__)

ContainerFactory = Callable[[], AppContainer]
PasswordPrompt = Callable[[str], str]


def cmd_create_user(
    args: argparse.Namespace,
    container: AppContainer,
    prompt: PasswordPrompt = getpass.getpass,
) -> int:
    """Create a user after prompting for the password twice."""
    password = prompt("Password: ")
    if not password:
        print("Error: Password must not be empty.")
        return 1
    if prompt("Repeat password: ") != password:
        print("Error: Passwords do not match.")
        return 1
    user = container.user_service.create_user(args.username, password)
    print(f"Created user {user.username} ({user.id})")
    return 0


def cmd_purge_sessions(args: argparse.Namespace, container: AppContainer) -> int:
    """Delete sessions older than the configured lifetime."""
    removed = container.session_service.purge_expired(args.max_age_days)
    print(f"Removed {removed} expired sessions")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nutrilog",
        description="nutrilog administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    create_parser = subparsers.add_parser("create-user", help="Create a user")
    create_parser.add_argument("username", help="Login name of the new user")

    purge_parser = subparsers.add_parser(
        "purge-sessions", help="Delete expired sessions"
    )
    purge_parser.add_argument(
        "--max-age-days",
        type=int,
        default=None,
        help="Session lifetime in days (default: configured session_days)",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    container_factory: ContainerFactory = build_container,
    prompt: PasswordPrompt = getpass.getpass,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    container = container_factory()
    configure_logging(container.settings.log_level)
    try:
        if args.command == "create-user":
            return cmd_create_user(args, container, prompt)
        return cmd_purge_sessions(args, container)
    except NutrilogError as exc:
        _logger.exception("Command %s failed", args.command)
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
