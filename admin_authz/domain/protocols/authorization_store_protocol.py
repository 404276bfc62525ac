"""Authorization store protocol (port).

The minimal set of operations the Authorizer and the offline tooling need
against a relationship-based authorization store.

Implementations:
    - OpenFGAClient: HTTP client for an OpenFGA server
    - NoopAuthorizationClient: used when authorization is disabled

Both must be safe for concurrent use by many pool workers.

Error Handling:
    Every operation returns a Result. Errors are AuthorizationStoreError
    subclasses: StoreUnavailableError, StoreUnauthorizedError,
    InvalidTupleError, InvalidModelError, ModelUnavailableError,
    ModelMismatchError.
"""

from typing import Protocol

from admin_authz.core.result import Result
from admin_authz.domain.entities import AuthorizationModel, RelationshipTuple, TuplePage
from admin_authz.domain.errors import AuthorizationStoreError


class AuthorizationStoreProtocol(Protocol):
    """Relationship store client contract."""

    # Provisioning and model management

    async def create_store(self, name: str) -> Result[str, AuthorizationStoreError]:
        """Create a store and return its id.

        Not idempotent: call at most once per logical deployment.
        """
        ...

    def set_store_id(self, store_id: str) -> None:
        """Point the client at a store (used after create_store)."""
        ...

    async def write_model(
        self, model: AuthorizationModel
    ) -> Result[str, AuthorizationStoreError]:
        """Register a new model version and return the assigned model id."""
        ...

    async def read_model(self) -> Result[AuthorizationModel, AuthorizationStoreError]:
        """Read the configured model, or the latest one when no id is set."""
        ...

    async def compare_model(
        self, model: AuthorizationModel
    ) -> Result[bool, AuthorizationStoreError]:
        """Structurally compare the active model with ``model``."""
        ...

    async def validate_model(
        self, expected: AuthorizationModel
    ) -> Result[None, AuthorizationStoreError]:
        """Fail with ModelMismatchError/ModelUnavailableError unless the
        active model equals ``expected``."""
        ...

    # Tuple mutations

    async def write_tuples(
        self, *tuples: RelationshipTuple
    ) -> Result[None, AuthorizationStoreError]: ...

    async def delete_tuples(
        self, *tuples: RelationshipTuple
    ) -> Result[None, AuthorizationStoreError]: ...

    # Queries

    async def read_tuples(
        self,
        *,
        user: str = "",
        relation: str = "",
        object: str = "",
        continuation_token: str = "",
    ) -> Result[TuplePage, AuthorizationStoreError]:
        """Read one page of tuples matching the (partial) key."""
        ...

    async def check(
        self,
        user: str,
        relation: str,
        object: str,
        *contextual_tuples: RelationshipTuple,
    ) -> Result[bool, AuthorizationStoreError]: ...

    async def list_objects(
        self, user: str, relation: str, object_type: str
    ) -> Result[list[str], AuthorizationStoreError]:
        """Ids (without the ``type:`` prefix) of objects ``user`` has ``relation`` on."""
        ...
