"""Principal middleware binding the authenticated caller per request.

The authenticating proxy in front of the service forwards the caller's
user id in PRINCIPAL_HEADER. The middleware binds it for the duration of
the request so entitlement dispatch can name the owner of new resources.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from admin_authz.core.constants import PRINCIPAL_HEADER
from admin_authz.core.principal import principal_context


class PrincipalMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that binds the request principal."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        principal = request.headers.get(PRINCIPAL_HEADER) or None
        token = principal_context.set(principal)
        try:
            return await call_next(request)
        finally:
            principal_context.reset(token)
