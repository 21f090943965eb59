"""
Command-line entry point.

Usage:
    onestay serve [--host 0.0.0.0] [--port 8080] [--reload]
    onestay seed-roles
    onestay reset-roles [--yes]
    onestay create-superadmin --email admin@example.com --password secret
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import uvicorn

from onestay.config import check_settings, get_settings
from onestay.core.errors import ConfigurationError, OneStayError
from onestay.logging_config import setup_logging
from onestay.seed import create_superadmin, reset_roles, seed_roles


def _serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    uvicorn.run(
        "onestay.api.app:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
        log_config=None,
    )
    return 0


def _seed_roles(args: argparse.Namespace) -> int:
    created = asyncio.run(seed_roles(get_settings()))
    print(f"Seeded {created} built-in role(s)")
    return 0


def _reset_roles(args: argparse.Namespace) -> int:
    if not args.yes:
        answer = input("This deletes every role, custom ones included. Continue? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted")
            return 1

    created = asyncio.run(reset_roles(get_settings()))
    print(f"Roles reset, {created} built-in role(s) seeded")
    return 0


def _create_superadmin(args: argparse.Namespace) -> int:
    user, created = asyncio.run(create_superadmin(
        get_settings(),
        email=args.email,
        password=args.password,
        first_name=args.first_name,
        last_name=args.last_name,
    ))
    if created:
        print(f"Created super-admin {user.email} ({user.id})")
    else:
        print(f"A user with email {user.email} already exists ({user.id}), left unchanged")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onestay",
        description="OneStay property rental backend",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address (default: API_HOST)")
    serve.add_argument("--port", type=int, help="Port (default: API_PORT)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(handler=_serve)

    seed = sub.add_parser("seed-roles", help="Insert missing built-in roles")
    seed.set_defaults(handler=_seed_roles)

    reset = sub.add_parser("reset-roles", help="Delete all roles and seed the built-in ones")
    reset.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    reset.set_defaults(handler=_reset_roles)

    admin = sub.add_parser("create-superadmin", help="Create the first super-admin account")
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", required=True)
    admin.add_argument("--first-name", default="Super")
    admin.add_argument("--last-name", default="Admin")
    admin.set_defaults(handler=_create_superadmin)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        check_settings(settings)
        return args.handler(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except OneStayError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
