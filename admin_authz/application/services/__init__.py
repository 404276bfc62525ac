"""Application services."""

from admin_authz.application.services.authorizer import (
    Authorizer,
    EntitlementTaskError,
)

__all__ = ["Authorizer", "EntitlementTaskError"]
