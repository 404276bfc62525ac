"""Entitlement dispatch and model gate.

The Authorizer is the single object resource services talk to. After a
resource service finished its own write, it calls
``set_create_<kind>_entitlements`` / ``set_delete_<kind>_entitlements``;
the Authorizer builds the tuple mutation from the kind's template and
submits it to the worker pool. The call returns once the task is queued.

Consistency:
    Entitlements are a best-effort projection of resource existence. A
    failed tuple write is logged by the task (with resource context) and
    counted by the pool; it never reaches the resource service and never
    rolls back the resource write. Create and delete tasks for the same
    resource may run in either order.

Lifecycle:
    CONSTRUCTED -> VALIDATING_MODEL -> READY -> DRAINING -> STOPPED

Usage:
    authorizer = Authorizer(store=client, pool=pool, logger=logger)
    result = await authorizer.validate_model()
    if isinstance(result, Failure):
        raise RuntimeError(str(result.error))

    with bind_principal("alice"):
        await authorizer.set_create_client_entitlements("client-123")
"""

from collections.abc import Iterable

from admin_authz.core.constants import ADMIN_OBJECT, ADMIN_RELATION
from admin_authz.core.enums import ErrorCode
from admin_authz.core.principal import get_principal
from admin_authz.core.result import Failure, Result, Success
from admin_authz.domain.authorization import (
    AUTH_MODEL,
    ENTITLEMENT_TEMPLATES,
    EntitlementTemplate,
)
from admin_authz.domain.entities import (
    AuthorizationModel,
    RelationshipTuple,
    user_for_tuple,
)
from admin_authz.domain.enums import AuthorizerState, EntitlementOperation, ResourceKind
from admin_authz.domain.errors import (
    AuthorizationStoreError,
    EntitlementDispatchError,
    EntitlementError,
    MissingPrincipalError,
)
from admin_authz.domain.protocols import (
    AuthorizationStoreProtocol,
    LoggerProtocol,
    Task,
    WorkerPoolProtocol,
)


class EntitlementTaskError(Exception):
    """Raised by a background entitlement task after it logged its failure.

    Lets the worker pool count the task as failed and mark its span.
    """

    def __init__(self, error: AuthorizationStoreError) -> None:
        super().__init__(str(error))
        self.error = error


class Authorizer:
    """Authorization façade used by resource services and bootstrap.

    Implements EntitlementsProtocol via structural typing.

    Dependencies (injected via constructor):
        - AuthorizationStoreProtocol: OpenFGA client or noop client
        - WorkerPoolProtocol: Background task executor (owned: stopped by shutdown())
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        *,
        store: AuthorizationStoreProtocol,
        pool: WorkerPoolProtocol,
        logger: LoggerProtocol,
        expected_model: AuthorizationModel = AUTH_MODEL,
        submit_timeout: float | None = None,
        templates: dict[ResourceKind, EntitlementTemplate] | None = None,
    ) -> None:
        """Initialize the Authorizer.

        Args:
            store: Relationship store client.
            pool: Worker pool for entitlement tasks.
            logger: Structured logger.
            expected_model: Model the store must hold (defaults to the packaged one).
            submit_timeout: Backpressure deadline for each submission.
            templates: Tuple templates per kind (defaults to ENTITLEMENT_TEMPLATES).
        """
        self._store = store
        self._pool = pool
        self._logger = logger
        self._expected_model = expected_model
        self._submit_timeout = submit_timeout
        self._templates = templates if templates is not None else ENTITLEMENT_TEMPLATES
        self._state = AuthorizerState.CONSTRUCTED

    @property
    def state(self) -> AuthorizerState:
        return self._state

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def validate_model(self) -> Result[None, AuthorizationStoreError]:
        """Check the store's active model against the expected model.

        Must succeed before the process serves traffic. On failure the
        Authorizer stays in VALIDATING_MODEL; callers abort startup.

        Returns:
            Success(None): Store model matches, state is READY.
            Failure(ModelMismatchError | ModelUnavailableError): Fatal.
        """
        self._state = AuthorizerState.VALIDATING_MODEL
        self._logger.info("authorization_model_validating")

        result = await self._store.validate_model(self._expected_model)

        match result:
            case Success():
                self._state = AuthorizerState.READY
                self._logger.info("authorization_model_validated")
            case Failure(error=error):
                self._logger.critical(
                    "authorization_model_invalid",
                    error_code=error.code.value,
                    reason=error.message,
                )

        return result

    async def shutdown(self) -> None:
        """Drain pending entitlement tasks and stop the pool. Idempotent."""
        if self._state in (AuthorizerState.DRAINING, AuthorizerState.STOPPED):
            return
        self._state = AuthorizerState.DRAINING
        self._logger.info("authorizer_draining")
        await self._pool.stop()
        self._state = AuthorizerState.STOPPED
        self._logger.info("authorizer_stopped")

    # =========================================================================
    # Entitlement dispatch
    # =========================================================================

    async def set_create_entitlements(
        self,
        kind: ResourceKind,
        resource_id: str,
        owner_id: str | None = None,
    ) -> Result[str, EntitlementError]:
        """Queue the grant of the kind's relations on a new resource.

        The actor is ``owner_id`` when given, else the principal bound to
        the current request.

        Returns:
            Success(str): Pool task id.
            Failure(MissingPrincipalError): No owner and no bound principal.
            Failure(EntitlementDispatchError): Pool refused the task.
        """
        template = self._templates[kind]
        actor = owner_id or get_principal()
        if not actor:
            self._logger.warning(
                "entitlement_principal_missing",
                resource_type=kind.object_type,
                resource_id=resource_id,
            )
            return Failure(
                error=MissingPrincipalError(
                    code=ErrorCode.PRINCIPAL_MISSING,
                    message="No owner given and no authenticated principal bound",
                    resource_type=kind.object_type,
                    resource_id=resource_id,
                )
            )

        tuples = template.grant_tuples(resource_id, actor=actor)
        store = self._store
        logger = self._logger
        context = _task_context(kind, resource_id, EntitlementOperation.GRANT)

        async def grant() -> None:
            result = await store.write_tuples(*tuples)
            if isinstance(result, Failure):
                logger.error(
                    "entitlement_write_failed",
                    error_code=result.error.code.value,
                    reason=result.error.message,
                    **context,
                )
                raise EntitlementTaskError(result.error)
            logger.debug("entitlement_written", tuples=len(tuples), **context)

        return await self._dispatch(grant, kind, resource_id, EntitlementOperation.GRANT)

    async def set_delete_entitlements(
        self, kind: ResourceKind, resource_id: str
    ) -> Result[str, EntitlementError]:
        """Queue the revocation of every tuple on a deleted resource.

        Returns:
            Success(str): Pool task id.
            Failure(EntitlementDispatchError): Pool refused the task.
        """
        obj = self._templates[kind].object_for(resource_id)
        store = self._store
        logger = self._logger
        context = _task_context(kind, resource_id, EntitlementOperation.REVOKE)

        async def revoke() -> None:
            attached: list[RelationshipTuple] = []
            token = ""
            while True:
                page = await store.read_tuples(object=obj, continuation_token=token)
                if isinstance(page, Failure):
                    logger.error(
                        "entitlement_read_failed",
                        error_code=page.error.code.value,
                        reason=page.error.message,
                        **context,
                    )
                    raise EntitlementTaskError(page.error)
                attached.extend(page.value.tuples)
                if not page.value.has_more:
                    break
                token = page.value.continuation_token

            if not attached:
                logger.debug("entitlements_already_absent", **context)
                return

            result = await store.delete_tuples(*attached)
            if isinstance(result, Failure):
                logger.error(
                    "entitlement_delete_failed",
                    error_code=result.error.code.value,
                    reason=result.error.message,
                    tuples=len(attached),
                    **context,
                )
                raise EntitlementTaskError(result.error)
            logger.debug("entitlements_deleted", tuples=len(attached), **context)

        return await self._dispatch(
            revoke, kind, resource_id, EntitlementOperation.REVOKE
        )

    async def set_create_client_entitlements(
        self, client_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]:
        return await self.set_create_entitlements(ResourceKind.CLIENT, client_id, owner_id)

    async def set_delete_client_entitlements(
        self, client_id: str
    ) -> Result[str, EntitlementError]:
        return await self.set_delete_entitlements(ResourceKind.CLIENT, client_id)

    async def set_create_provider_entitlements(
        self, provider_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]:
        return await self.set_create_entitlements(
            ResourceKind.PROVIDER, provider_id, owner_id
        )

    async def set_delete_provider_entitlements(
        self, provider_id: str
    ) -> Result[str, EntitlementError]:
        return await self.set_delete_entitlements(ResourceKind.PROVIDER, provider_id)

    async def set_create_rule_entitlements(
        self, rule_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]:
        return await self.set_create_entitlements(ResourceKind.RULE, rule_id, owner_id)

    async def set_delete_rule_entitlements(
        self, rule_id: str
    ) -> Result[str, EntitlementError]:
        return await self.set_delete_entitlements(ResourceKind.RULE, rule_id)

    async def set_create_schema_entitlements(
        self, schema_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]:
        return await self.set_create_entitlements(ResourceKind.SCHEMA, schema_id, owner_id)

    async def set_delete_schema_entitlements(
        self, schema_id: str
    ) -> Result[str, EntitlementError]:
        return await self.set_delete_entitlements(ResourceKind.SCHEMA, schema_id)

    async def set_create_identity_entitlements(
        self, identity_id: str, owner_id: str | None = None
    ) -> Result[str, EntitlementError]:
        return await self.set_create_entitlements(
            ResourceKind.IDENTITY, identity_id, owner_id
        )

    async def set_delete_identity_entitlements(
        self, identity_id: str
    ) -> Result[str, EntitlementError]:
        return await self.set_delete_entitlements(ResourceKind.IDENTITY, identity_id)

    # =========================================================================
    # Queries (synchronous, not pooled)
    # =========================================================================

    async def check(
        self, user: str, relation: str, object: str
    ) -> Result[bool, AuthorizationStoreError]:
        return await self._store.check(user_for_tuple(user), relation, object)

    async def list_objects(
        self, user: str, relation: str, object_type: str
    ) -> Result[list[str], AuthorizationStoreError]:
        return await self._store.list_objects(user_for_tuple(user), relation, object_type)

    async def filter_objects(
        self,
        user: str,
        relation: str,
        object_type: str,
        ids: Iterable[str],
    ) -> Result[list[str], AuthorizationStoreError]:
        """Keep the candidate ids ``user`` has ``relation`` on, in input order."""
        allowed = await self.list_objects(user, relation, object_type)
        if isinstance(allowed, Failure):
            return allowed
        permitted = set(allowed.value)
        return Success(value=[i for i in ids if i in permitted])

    # =========================================================================
    # Administrators
    # =========================================================================

    async def create_admin(self, username: str) -> Result[None, AuthorizationStoreError]:
        """Grant ``username`` the superuser admin relation."""
        result = await self._store.write_tuples(_admin_tuple(username))
        if isinstance(result, Success):
            self._logger.info("admin_created", username=username)
        return result

    async def remove_admin(self, username: str) -> Result[None, AuthorizationStoreError]:
        result = await self._store.delete_tuples(_admin_tuple(username))
        if isinstance(result, Success):
            self._logger.info("admin_removed", username=username)
        return result

    async def check_admin(self, username: str) -> Result[bool, AuthorizationStoreError]:
        admin = _admin_tuple(username)
        return await self._store.check(admin.user, admin.relation, admin.object)

    async def _dispatch(
        self,
        task: Task,
        kind: ResourceKind,
        resource_id: str,
        operation: EntitlementOperation,
    ) -> Result[str, EntitlementError]:
        submitted = await self._pool.submit(task, timeout=self._submit_timeout)

        if isinstance(submitted, Failure):
            self._logger.warning(
                "entitlement_dispatch_rejected",
                resource_type=kind.object_type,
                resource_id=resource_id,
                operation=operation.value,
                reason=submitted.error.message,
            )
            return Failure(
                error=EntitlementDispatchError(
                    code=ErrorCode.ENTITLEMENT_DISPATCH_FAILED,
                    message="Entitlement task was not queued",
                    resource_type=kind.object_type,
                    resource_id=resource_id,
                    reason=submitted.error.message,
                )
            )

        self._logger.debug(
            "entitlement_dispatched",
            resource_type=kind.object_type,
            resource_id=resource_id,
            operation=operation.value,
            task_id=submitted.value,
        )
        return submitted


def _task_context(
    kind: ResourceKind, resource_id: str, operation: EntitlementOperation
) -> dict[str, str]:
    return {
        "resource_type": kind.object_type,
        "resource_id": resource_id,
        "operation": operation.value,
    }


def _admin_tuple(username: str) -> RelationshipTuple:
    return RelationshipTuple(
        user=user_for_tuple(username), relation=ADMIN_RELATION, object=ADMIN_OBJECT
    )
