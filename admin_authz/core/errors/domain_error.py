"""Base error class for Result-based error handling.

DomainError is the base of every error in the package. Errors are data:
they are returned inside Failure, never raised across layer boundaries.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class StoreUnavailableError(AuthorizationStoreError):
        pass
"""

from dataclasses import dataclass
from typing import Any

from admin_authz.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
