"""Argument parser for the ``admin-authz`` CLI."""

from __future__ import annotations

import argparse

from admin_authz.core.constants import DEFAULT_STORE_NAME

from .commands import admin, model

__all__ = ["build_cli_app"]


def _add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--api-url",
        required=True,
        help="OpenFGA API URL, e.g. http://localhost:8080",
    )
    parser.add_argument(
        "--api-token",
        default="",
        help="Pre-shared OpenFGA API token",
    )


def build_cli_app() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="admin-authz",
        description="Provision the OpenFGA store and manage superusers.",
    )
    commands = parser.add_subparsers(dest="command")

    create_model = commands.add_parser(
        "create-model",
        help="Write the packaged authorization model (creating a store if needed)",
    )
    _add_connection_arguments(create_model)
    create_model.add_argument(
        "--store-id",
        default="",
        help="Existing store id; a new store is created when omitted",
    )
    create_model.add_argument(
        "--store-name",
        default=DEFAULT_STORE_NAME,
        help=f"Name of the store to create (default: {DEFAULT_STORE_NAME})",
    )
    create_model.set_defaults(handler=model.create_model)

    admin_parser = commands.add_parser("admin", help="Manage superusers")
    admin_commands = admin_parser.add_subparsers(dest="admin_command")

    for name, handler, summary in (
        ("add", admin.add, "Grant a user the superuser admin relation"),
        ("remove", admin.remove, "Revoke the superuser admin relation"),
    ):
        sub = admin_commands.add_parser(name, help=summary)
        _add_connection_arguments(sub)
        sub.add_argument("--store-id", required=True, help="OpenFGA store id")
        sub.add_argument(
            "--model-id",
            default="",
            help="Authorization model id (latest model when omitted)",
        )
        sub.add_argument("--user", required=True, help="User id to (un)grant")
        sub.set_defaults(handler=handler)

    return parser
