"""Resource kinds that carry entitlements.

Each kind maps to an object type of the authorization model. The value is
the object type name used in relationship tuples (note that identity
schemas are modelled as ``scheme``).
"""

from enum import Enum


class ResourceKind(str, Enum):
    """Domain resources whose lifecycle is mirrored into the store."""

    CLIENT = "client"
    PROVIDER = "provider"
    RULE = "rule"
    SCHEMA = "scheme"
    IDENTITY = "identity"

    @property
    def object_type(self) -> str:
        return self.value

    def object_for(self, resource_id: str) -> str:
        """Return the tuple object for a resource of this kind.

        Example:
            >>> ResourceKind.CLIENT.object_for("client-123")
            'client:client-123'
        """
        return f"{self.value}:{resource_id}"
