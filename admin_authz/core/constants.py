"""Centralized constants for internal implementation details.

These are NOT environment-specific. Tunables that operators change per
deployment live in admin_authz.core.config.
"""

# =============================================================================
# Authorization store
# =============================================================================

STORE_TIMEOUT_DEFAULT: float = 5.0
"""Default timeout for a single authorization store HTTP call in seconds."""

MAX_TUPLES_PER_WRITE: int = 100
"""Upper bound of tuple keys the store accepts in one write request."""

READ_PAGE_SIZE: int = 100
"""Page size used when listing tuples attached to an object."""

DEFAULT_STORE_NAME: str = "identity-admin-ui"
"""Store name used by the create-model command when none is given."""

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Truncation length for store response bodies kept in error details."""

BEARER_PREFIX: str = "Bearer "
"""HTTP Authorization header prefix for the store API token."""


# =============================================================================
# Worker pool
# =============================================================================

POOL_QUEUE_SIZE_DEFAULT: int = 200
"""Default capacity of the worker pool task queue."""

POOL_SHUTDOWN_TIMEOUT_DEFAULT: float = 15.0
"""Default grace period for draining the pool on shutdown in seconds."""


# =============================================================================
# Relationship tuples
# =============================================================================

USER_TYPE: str = "user"
"""Object type of human subjects in relationship tuples."""

ADMIN_OBJECT: str = "privileged:superuser"
"""Object that carries the global admin relation."""

ADMIN_RELATION: str = "admin"
"""Relation granting global admin rights on ADMIN_OBJECT."""


# =============================================================================
# Request context
# =============================================================================

PRINCIPAL_HEADER: str = "X-Authenticated-User"
"""Header set by the authenticating proxy with the caller's user id."""
