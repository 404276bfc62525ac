"""Shared helpers for CLI commands."""

from __future__ import annotations

import sys
from argparse import Namespace
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from admin_authz.core.result import Failure, Result
from admin_authz.domain.errors import AuthorizationStoreError
from admin_authz.infrastructure.logging import StructlogAdapter
from admin_authz.infrastructure.openfga import OpenFGAClient

__all__ = ["CommandError", "cli_logger", "open_client", "unwrap"]


class CommandError(Exception):
    """A command could not complete; the message is shown to the operator."""


def cli_logger() -> StructlogAdapter:
    return StructlogAdapter(level="WARNING", stream=sys.stderr)


@asynccontextmanager
async def open_client(args: Namespace) -> AsyncIterator[OpenFGAClient]:
    """Yield an OpenFGA client built from the common connection flags."""
    api_url = (args.api_url or "").strip()
    if not api_url:
        raise ValueError("--api-url is required")

    client = OpenFGAClient(
        api_url=api_url,
        api_token=args.api_token or "",
        store_id=getattr(args, "store_id", None) or "",
        model_id=getattr(args, "model_id", None) or "",
        logger=cli_logger(),
    )
    async with client:
        yield client


def unwrap[T](result: Result[T, AuthorizationStoreError], action: str) -> T:
    """Return the success value or raise CommandError naming ``action``."""
    if isinstance(result, Failure):
        raise CommandError(f"{action}: {result.error}")
    return result.value
