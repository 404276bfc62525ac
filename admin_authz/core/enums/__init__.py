"""Core enums package.

Usage:
    from admin_authz.core.enums import ErrorCode, Environment
"""

from admin_authz.core.enums.environment import Environment
from admin_authz.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
