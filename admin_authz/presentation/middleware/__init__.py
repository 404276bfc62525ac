"""Request middleware."""

from admin_authz.presentation.middleware.principal_middleware import (
    PrincipalMiddleware,
)

__all__ = ["PrincipalMiddleware"]
