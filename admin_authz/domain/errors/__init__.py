"""Domain errors package.

Usage:
    from admin_authz.domain.errors import ModelMismatchError, PoolSaturatedError
"""

from admin_authz.domain.errors.authorization_store_error import (
    AuthorizationStoreError,
    InvalidModelError,
    InvalidTupleError,
    ModelMismatchError,
    ModelUnavailableError,
    StoreUnauthorizedError,
    StoreUnavailableError,
)
from admin_authz.domain.errors.entitlement_error import (
    EntitlementDispatchError,
    EntitlementError,
    MissingPrincipalError,
)
from admin_authz.domain.errors.worker_pool_error import (
    PoolClosedError,
    PoolSaturatedError,
    WorkerPoolError,
)

__all__ = [
    # Authorization store
    "AuthorizationStoreError",
    "StoreUnavailableError",
    "StoreUnauthorizedError",
    "InvalidTupleError",
    "InvalidModelError",
    "ModelUnavailableError",
    "ModelMismatchError",
    # Entitlement dispatch
    "EntitlementError",
    "MissingPrincipalError",
    "EntitlementDispatchError",
    # Worker pool
    "WorkerPoolError",
    "PoolSaturatedError",
    "PoolClosedError",
]
