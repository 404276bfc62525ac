"""Authorization store error types.

These errors are part of the AuthorizationStoreProtocol contract: every
store client (HTTP or noop) returns them inside Failure.

Architecture:
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)
- Model errors are fatal at startup; tuple errors are only logged by the
  background task that hit them

Usage:
    from admin_authz.domain.errors import StoreUnavailableError

    return Failure(
        error=StoreUnavailableError(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="OpenFGA request timed out",
            operation="write_tuples",
        )
    )
"""

from dataclasses import dataclass

from admin_authz.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationStoreError(DomainError):
    """Base relationship store error.

    Attributes:
        code: ErrorCode.
        message: Human-readable message.
        operation: Store operation that failed (write_tuples, read_model, ...).
        details: Additional context (status code, response body).
    """

    operation: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreUnavailableError(AuthorizationStoreError):
    """Store unreachable, timed out, or answered with a server error.

    Attributes:
        is_transient: Whether retrying later may succeed.
    """

    is_transient: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreUnauthorizedError(AuthorizationStoreError):
    """The store rejected this process's own API credentials."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidTupleError(AuthorizationStoreError):
    """A tuple does not fit the model (unknown type, relation or user)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidModelError(AuthorizationStoreError):
    """The store refused an authorization model definition."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class ModelUnavailableError(AuthorizationStoreError):
    """The active authorization model could not be read."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class ModelMismatchError(AuthorizationStoreError):
    """The active model differs from the embedded expected model.

    Attributes:
        model_id: Id of the model found in the store.
        mismatch: Which part differs (schema_version, type_definitions, conditions).
    """

    model_id: str | None = None
    mismatch: str | None = None
