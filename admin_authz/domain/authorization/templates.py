"""Entitlement tuple templates per resource kind.

Every kind is treated the same way: the actor becomes ``owner`` of the
new object on create, and every tuple on the object is revoked on
delete. Keeping the mapping in one table means a new ResourceKind cannot
silently miss its template.

Usage:
    template = ENTITLEMENT_TEMPLATES[ResourceKind.CLIENT]
    tuples = template.grant_tuples("client-123", actor="alice")
    # [RelationshipTuple(user="user:alice", relation="owner", object="client:client-123")]
"""

from dataclasses import dataclass

from admin_authz.domain.entities import RelationshipTuple, user_for_tuple
from admin_authz.domain.enums import ResourceKind

OWNER_RELATION = "owner"


@dataclass(frozen=True, slots=True, kw_only=True)
class EntitlementTemplate:
    """Tuple template for one resource kind.

    Attributes:
        kind: Resource kind the template applies to.
        grant_relations: Relations the actor receives on create.
    """

    kind: ResourceKind
    grant_relations: tuple[str, ...] = (OWNER_RELATION,)

    def object_for(self, resource_id: str) -> str:
        return self.kind.object_for(resource_id)

    def grant_tuples(self, resource_id: str, *, actor: str) -> list[RelationshipTuple]:
        """Tuples written when a resource is created by ``actor``."""
        obj = self.object_for(resource_id)
        user = user_for_tuple(actor)
        return [
            RelationshipTuple(user=user, relation=relation, object=obj)
            for relation in self.grant_relations
        ]


ENTITLEMENT_TEMPLATES: dict[ResourceKind, EntitlementTemplate] = {
    kind: EntitlementTemplate(kind=kind) for kind in ResourceKind
}
