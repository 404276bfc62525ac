"""Machine-readable error codes.

Codes follow the ENTITY_REASON naming convention and travel inside
DomainError instances (see admin_authz.core.errors).

Categories:
- Authorization store errors (STORE_*, TUPLE_*)
- Authorization model errors (MODEL_*)
- Worker pool errors (POOL_*)
- Entitlement dispatch errors (PRINCIPAL_*, ENTITLEMENT_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""

    # Authorization store
    STORE_UNAVAILABLE = "store_unavailable"
    STORE_UNAUTHORIZED = "store_unauthorized"
    STORE_NOT_CONFIGURED = "store_not_configured"
    TUPLE_INVALID = "tuple_invalid"

    # Authorization model
    MODEL_INVALID = "model_invalid"
    MODEL_MISMATCH = "model_mismatch"
    MODEL_UNAVAILABLE = "model_unavailable"

    # Worker pool
    POOL_SATURATED = "pool_saturated"
    POOL_CLOSED = "pool_closed"

    # Entitlement dispatch
    PRINCIPAL_MISSING = "principal_missing"
    ENTITLEMENT_DISPATCH_FAILED = "entitlement_dispatch_failed"
