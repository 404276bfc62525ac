"""Authorization store stand-in used when authorization is disabled.

Same interface as OpenFGAClient, no I/O. Mutations and model checks
always succeed, checks always allow and listings are empty, so the
Authorizer and every resource service run unchanged with enforcement off.
"""

from admin_authz.core.result import Result, Success
from admin_authz.domain.entities import AuthorizationModel, RelationshipTuple, TuplePage
from admin_authz.domain.errors import AuthorizationStoreError


class NoopAuthorizationClient:
    """AuthorizationStoreProtocol implementation that does nothing."""

    def __init__(self, store_id: str = "", model_id: str = "") -> None:
        self._store_id = store_id
        self._model_id = model_id

    @property
    def store_id(self) -> str:
        return self._store_id

    @property
    def model_id(self) -> str:
        return self._model_id

    def set_store_id(self, store_id: str) -> None:
        self._store_id = store_id

    async def aclose(self) -> None:
        return None

    async def create_store(self, name: str) -> Result[str, AuthorizationStoreError]:
        return Success(value=self._store_id)

    async def write_model(
        self, model: AuthorizationModel
    ) -> Result[str, AuthorizationStoreError]:
        return Success(value=self._model_id)

    async def read_model(self) -> Result[AuthorizationModel, AuthorizationStoreError]:
        """Return an empty model; nothing is stored."""
        return Success(value=AuthorizationModel(schema_version="1.1", id=self._model_id))

    async def compare_model(
        self, model: AuthorizationModel
    ) -> Result[bool, AuthorizationStoreError]:
        return Success(value=True)

    async def validate_model(
        self, expected: AuthorizationModel
    ) -> Result[None, AuthorizationStoreError]:
        return Success(value=None)

    async def write_tuples(
        self, *tuples: RelationshipTuple
    ) -> Result[None, AuthorizationStoreError]:
        return Success(value=None)

    async def delete_tuples(
        self, *tuples: RelationshipTuple
    ) -> Result[None, AuthorizationStoreError]:
        return Success(value=None)

    async def read_tuples(
        self,
        *,
        user: str = "",
        relation: str = "",
        object: str = "",
        continuation_token: str = "",
    ) -> Result[TuplePage, AuthorizationStoreError]:
        return Success(value=TuplePage())

    async def check(
        self,
        user: str,
        relation: str,
        object: str,
        *contextual_tuples: RelationshipTuple,
    ) -> Result[bool, AuthorizationStoreError]:
        return Success(value=True)

    async def list_objects(
        self, user: str, relation: str, object_type: str
    ) -> Result[list[str], AuthorizationStoreError]:
        return Success(value=[])
