"""Domain entities package."""

from admin_authz.domain.entities.authorization_model import AuthorizationModel
from admin_authz.domain.entities.relationship_tuple import (
    RelationshipTuple,
    TuplePage,
    user_for_tuple,
)

__all__ = ["AuthorizationModel", "RelationshipTuple", "TuplePage", "user_for_tuple"]
