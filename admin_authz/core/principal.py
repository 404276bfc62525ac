"""Authenticated principal for the current request.

Request handling binds the caller's identifier; entitlement dispatch reads
it to decide who owns a freshly created resource. The value is captured
when a task is built, so background tasks never read it later.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

principal_context: ContextVar[str | None] = ContextVar("principal", default=None)


def get_principal() -> str | None:
    """Return the current principal identifier, or None outside a request."""
    return principal_context.get()


@contextmanager
def bind_principal(principal_id: str) -> Iterator[str]:
    """Bind a principal for the duration of the block.

    Example:
        with bind_principal("alice"):
            await authorizer.set_create_client_entitlements("client-123")
    """
    token = principal_context.set(principal_id)
    try:
        yield principal_id
    finally:
        principal_context.reset(token)
