"""Entitlement dispatch errors.

Returned synchronously by the Authorizer when a task cannot even be
built or enqueued. Failures of the background write itself are logged
by the task and never reach the caller.
"""

from dataclasses import dataclass

from admin_authz.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class EntitlementError(DomainError):
    """Base entitlement dispatch error.

    Attributes:
        resource_type: Object type of the resource (client, provider, ...).
        resource_id: Identifier of the resource.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class MissingPrincipalError(EntitlementError):
    """No owner given and no authenticated principal bound to the request."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class EntitlementDispatchError(EntitlementError):
    """The worker pool refused the entitlement task.

    Attributes:
        reason: Pool error that caused the rejection.
    """

    reason: str
