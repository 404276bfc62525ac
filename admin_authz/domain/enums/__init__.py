"""Domain enums package."""

from admin_authz.domain.enums.authorizer_state import AuthorizerState
from admin_authz.domain.enums.entitlement_operation import EntitlementOperation
from admin_authz.domain.enums.resource_kind import ResourceKind

__all__ = ["AuthorizerState", "EntitlementOperation", "ResourceKind"]
