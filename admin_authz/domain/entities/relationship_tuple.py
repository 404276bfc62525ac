"""Relationship tuple entity.

A tuple states that ``user`` has ``relation`` on ``object``, written
``object#relation@user`` (for example ``client:abc#owner@user:alice``).
Wrapping the store's tuple key keeps the SDK/wire shape out of the
domain.
"""

from dataclasses import dataclass, field
from typing import Any

from admin_authz.core.constants import USER_TYPE


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationshipTuple:
    """Immutable ``(user, relation, object)`` triple.

    Attributes:
        user: Subject, e.g. ``user:alice`` or ``group:devs#member``.
        relation: Relation name, e.g. ``owner``.
        object: Object, e.g. ``client:client-123``.
    """

    user: str
    relation: str
    object: str

    def to_key(self) -> dict[str, str]:
        """Return the store tuple key representation."""
        return {"user": self.user, "relation": self.relation, "object": self.object}

    @classmethod
    def from_key(cls, key: dict[str, Any]) -> "RelationshipTuple":
        return cls(
            user=str(key.get("user", "")),
            relation=str(key.get("relation", "")),
            object=str(key.get("object", "")),
        )

    def __str__(self) -> str:
        return f"{self.object}#{self.relation}@{self.user}"


@dataclass(frozen=True, slots=True, kw_only=True)
class TuplePage:
    """One page of a tuple read.

    Attributes:
        tuples: Tuples on this page.
        continuation_token: Token for the next page, empty when exhausted.
    """

    tuples: list[RelationshipTuple] = field(default_factory=list)
    continuation_token: str = ""

    @property
    def has_more(self) -> bool:
        return bool(self.continuation_token)


def user_for_tuple(user_id: str) -> str:
    """Return the tuple subject for a human user.

    Identifiers that already carry a type prefix are returned unchanged.
    """
    if ":" in user_id:
        return user_id
    return f"{USER_TYPE}:{user_id}"
