"""Entitlements protocol (port) used by resource services.

Resource services (OAuth2 clients, identity providers, rules, schemas,
identities) call these after their own write succeeded. Each call only
enqueues a background task and returns; a later failure of the tuple
write is never reported back and must not roll back the resource write.

Usage:
    result = await entitlements.set_create_client_entitlements(client_id)
    if isinstance(result, Failure):
        logger.warning("entitlement_not_dispatched", reason=str(result.error))
"""

from typing import Protocol

from admin_authz.core.result import Result
from admin_authz.domain.errors import EntitlementError


class EntitlementsProtocol(Protocol):
    """Per-resource entitlement dispatch."""

    async def set_create_client_entitlements(
        self, client_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]: ...

    async def set_delete_client_entitlements(
        self, client_id: str
    ) -> Result[str, EntitlementError]: ...

    async def set_create_provider_entitlements(
        self, provider_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]: ...

    async def set_delete_provider_entitlements(
        self, provider_id: str
    ) -> Result[str, EntitlementError]: ...

    async def set_create_rule_entitlements(
        self, rule_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]: ...

    async def set_delete_rule_entitlements(
        self, rule_id: str
    ) -> Result[str, EntitlementError]: ...

    async def set_create_schema_entitlements(
        self, schema_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]: ...

    async def set_delete_schema_entitlements(
        self, schema_id: str
    ) -> Result[str, EntitlementError]: ...

    async def set_create_identity_entitlements(
        self, identity_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]: ...

    async def set_delete_identity_entitlements(
        self, identity_id: str
    ) -> Result[str, EntitlementError]: ...
