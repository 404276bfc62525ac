"""Logging adapters."""

from admin_authz.infrastructure.logging.structlog_adapter import StructlogAdapter

__all__ = ["StructlogAdapter"]
