"""Core errors package."""

from admin_authz.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
