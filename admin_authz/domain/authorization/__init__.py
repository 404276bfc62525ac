"""Authorization model and entitlement templates."""

from admin_authz.domain.authorization.model import AUTH_MODEL, load_authorization_model
from admin_authz.domain.authorization.templates import (
    ENTITLEMENT_TEMPLATES,
    OWNER_RELATION,
    EntitlementTemplate,
)

__all__ = [
    "AUTH_MODEL",
    "ENTITLEMENT_TEMPLATES",
    "OWNER_RELATION",
    "EntitlementTemplate",
    "load_authorization_model",
]
