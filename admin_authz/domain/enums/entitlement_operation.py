"""Entitlement mutation direction."""

from enum import Enum


class EntitlementOperation(str, Enum):
    """Grant on resource creation, revoke on resource deletion."""

    GRANT = "grant"
    REVOKE = "revoke"
