"""Superuser management commands."""

from __future__ import annotations

from argparse import Namespace

from admin_authz.application.services import Authorizer
from admin_authz.infrastructure.openfga import OpenFGAClient
from admin_authz.infrastructure.pool import AsyncWorkerPool

from ..runtime import cli_logger, open_client, unwrap

__all__ = ["add", "remove"]


def _require_target(args: Namespace) -> str:
    if not args.store_id:
        raise ValueError("--store-id is required")
    user = (args.user or "").strip()
    if not user:
        raise ValueError("--user must not be empty")
    return user


async def add(args: Namespace) -> None:
    user = _require_target(args)
    async with open_client(args) as client:
        authorizer = _authorizer(client)
        unwrap(await authorizer.create_admin(user), f"Failed to add admin {user}")
        await authorizer.shutdown()
    print(f"Added admin {user}")


async def remove(args: Namespace) -> None:
    user = _require_target(args)
    async with open_client(args) as client:
        authorizer = _authorizer(client)
        unwrap(await authorizer.remove_admin(user), f"Failed to remove admin {user}")
        await authorizer.shutdown()
    print(f"Removed admin {user}")


def _authorizer(client: OpenFGAClient) -> Authorizer:
    # Admin changes are awaited directly; the pool never receives a task.
    logger = cli_logger()
    return Authorizer(store=client, pool=AsyncWorkerPool(1, logger=logger), logger=logger)
