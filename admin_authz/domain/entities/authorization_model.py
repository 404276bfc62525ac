"""Authorization model entity.

The versioned schema the relationship store enforces: a schema version,
type definitions (types with their relations) and conditions. The process
never mutates a model; it only compares the store's active model against
the one shipped with the package.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, kw_only=True)
class AuthorizationModel:
    """Immutable authorization model.

    Attributes:
        schema_version: Model DSL schema version (e.g. "1.1").
        type_definitions: Store type definitions, in store JSON shape.
        conditions: Named conditions, in store JSON shape.
        id: Store-assigned model id, None for the embedded model.
    """

    schema_version: str
    type_definitions: list[dict[str, Any]] = field(default_factory=list)
    conditions: dict[str, Any] = field(default_factory=dict)
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuthorizationModel":
        """Build a model from the store JSON representation.

        Raises:
            ValueError: If schema_version is missing or type_definitions is not a list.
        """
        schema_version = data.get("schema_version")
        if not schema_version:
            raise ValueError("authorization model without schema_version")
        type_definitions = data.get("type_definitions") or []
        if not isinstance(type_definitions, list):
            raise ValueError("type_definitions must be a list")
        return cls(
            schema_version=str(schema_version),
            type_definitions=type_definitions,
            conditions=dict(data.get("conditions") or {}),
            id=data.get("id"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the body accepted by the store's write-model endpoint."""
        body: dict[str, Any] = {
            "schema_version": self.schema_version,
            "type_definitions": self.type_definitions,
        }
        if self.conditions:
            body["conditions"] = self.conditions
        return body

    @property
    def type_names(self) -> list[str]:
        return [str(t.get("type")) for t in self.type_definitions]

    def relations_of(self, type_name: str) -> set[str]:
        """Relation names defined on a type (empty when the type is unknown)."""
        for definition in self.type_definitions:
            if definition.get("type") == type_name:
                return set((definition.get("relations") or {}).keys())
        return set()

    def diff(self, other: "AuthorizationModel") -> str | None:
        """Return the first differing part, or None when structurally equal.

        Ids are ignored. Type definitions are compared keyed by type name,
        so ordering differences are not a mismatch. Missing conditions equal
        empty conditions.
        """
        if self.schema_version != other.schema_version:
            return "schema_version"
        if _normalize(_by_type(self.type_definitions)) != _normalize(
            _by_type(other.type_definitions)
        ):
            return "type_definitions"
        if _normalize(self.conditions or {}) != _normalize(other.conditions or {}):
            return "conditions"
        return None

    def matches(self, other: "AuthorizationModel") -> bool:
        return self.diff(other) is None


def _by_type(type_definitions: list[dict[str, Any]]) -> dict[str, Any]:
    return {str(t.get("type")): t for t in type_definitions}


def _normalize(value: Any) -> Any:
    # Stores return null or "" for unset members; treat both as absent.
    if isinstance(value, dict):
        normalized = {k: _normalize(v) for k, v in value.items()}
        return {k: v for k, v in normalized.items() if v not in (None, "")}
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    return value
