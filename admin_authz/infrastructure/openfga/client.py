"""OpenFGA authorization store client.

HTTP client for the OpenFGA REST API, implementing
AuthorizationStoreProtocol. It handles:
- Request execution with timeout/connection error handling
- Status code interpretation per operation (tuple vs model calls)
- JSON parsing with error handling
- One span per store call

Architecture:
    - Infrastructure layer (adapter for the relationship store)
    - Uses one shared httpx.AsyncClient (connection pooling), safe for
      concurrent use by all pool workers
    - Returns Result types (no exceptions for store errors)

Status mapping:
    timeout / connection error / 5xx / bad JSON -> StoreUnavailableError
    401 / 403                                   -> StoreUnauthorizedError
    400 / 422                                   -> InvalidTupleError or InvalidModelError
    404                                         -> ModelUnavailableError for model
                                                   reads, StoreUnavailableError otherwise
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import httpx
from opentelemetry.trace import Status, StatusCode, Tracer

from admin_authz.core.constants import (
    BEARER_PREFIX,
    MAX_TUPLES_PER_WRITE,
    READ_PAGE_SIZE,
    RESPONSE_BODY_MAX_LENGTH,
    STORE_TIMEOUT_DEFAULT,
)
from admin_authz.core.enums import ErrorCode
from admin_authz.core.result import Failure, Result, Success
from admin_authz.domain.entities import AuthorizationModel, RelationshipTuple, TuplePage
from admin_authz.domain.errors import (
    AuthorizationStoreError,
    InvalidModelError,
    InvalidTupleError,
    ModelMismatchError,
    ModelUnavailableError,
    StoreUnauthorizedError,
    StoreUnavailableError,
)
from admin_authz.domain.protocols import LoggerProtocol
from admin_authz.infrastructure.observability import get_tracer, traced

_MODEL_OPERATIONS = frozenset({"write_model", "read_model"})


class OpenFGAClient:
    """OpenFGA REST client.

    Attributes:
        _api_url: Server base URL (scheme and host, no trailing slash).
        _store_id: Target store id ("" until configured or created).
        _model_id: Authorization model id used for writes and queries
            ("" lets the server pick the latest model).
        _timeout: Per-request timeout in seconds.

    Example:
        >>> client = OpenFGAClient(
        ...     api_url="http://localhost:8080",
        ...     api_token="secret",
        ...     store_id="01HV...",
        ...     logger=logger,
        ... )
        >>> result = await client.write_tuples(
        ...     RelationshipTuple(user="user:alice", relation="owner", object="client:c1")
        ... )
    """

    def __init__(
        self,
        *,
        api_url: str,
        logger: LoggerProtocol,
        api_token: str = "",
        store_id: str = "",
        model_id: str = "",
        timeout: float = STORE_TIMEOUT_DEFAULT,
        tracer: Tracer | None = None,
    ) -> None:
        """Initialize the client. No connection is opened until the first call.

        Args:
            api_url: OpenFGA base URL (e.g., "http://openfga:8080").
            logger: Logger for store call failures.
            api_token: Pre-shared key sent as Bearer token ("" disables auth).
            store_id: Store id, may be set later via set_store_id().
            model_id: Authorization model id.
            timeout: Per-request timeout in seconds.
            tracer: OpenTelemetry tracer. Defaults to the package tracer.
        """
        self._api_url = api_url.rstrip("/")
        self._api_token = api_token
        self._store_id = store_id
        self._model_id = model_id
        self._timeout = timeout
        self._logger = logger
        self._tracer = tracer if tracer is not None else get_tracer()
        self._client: httpx.AsyncClient | None = None

    @property
    def store_id(self) -> str:
        return self._store_id

    @property
    def model_id(self) -> str:
        return self._model_id

    def set_store_id(self, store_id: str) -> None:
        self._store_id = store_id

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> OpenFGAClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # =========================================================================
    # Provisioning and model management
    # =========================================================================

    async def create_store(self, name: str) -> Result[str, AuthorizationStoreError]:
        """Create a store and point the client at it.

        Returns:
            Success(str): New store id.
        """
        result = await self._request(
            method="POST",
            path="/stores",
            json_data={"name": name},
            operation="create_store",
        )
        if isinstance(result, Failure):
            return result

        store_id = result.value.get("id")
        if not store_id:
            return Failure(
                error=self._unavailable(
                    "create_store", "OpenFGA create store response has no id"
                )
            )

        self._store_id = str(store_id)
        self._logger.info("openfga_store_created", store_id=self._store_id, name=name)
        return Success(value=self._store_id)

    async def write_model(
        self, model: AuthorizationModel
    ) -> Result[str, AuthorizationStoreError]:
        """Register a new model version and use it for subsequent calls.

        Returns:
            Success(str): Assigned authorization model id.
            Failure(InvalidModelError): Store rejected the definition.
        """
        result = await self._store_request(
            method="POST",
            path="/authorization-models",
            json_data=model.to_dict(),
            operation="write_model",
        )
        if isinstance(result, Failure):
            return result

        model_id = result.value.get("authorization_model_id")
        if not model_id:
            return Failure(
                error=self._unavailable(
                    "write_model", "OpenFGA write model response has no model id"
                )
            )

        self._model_id = str(model_id)
        self._logger.info(
            "openfga_model_written", store_id=self._store_id, model_id=self._model_id
        )
        return Success(value=self._model_id)

    async def read_model(self) -> Result[AuthorizationModel, AuthorizationStoreError]:
        """Read the configured model, or the latest model when no id is set.

        Returns:
            Success(AuthorizationModel): Active model.
            Failure(ModelUnavailableError): Store has no such model.
        """
        if self._model_id:
            result = await self._store_request(
                method="GET",
                path=f"/authorization-models/{self._model_id}",
                operation="read_model",
            )
            if isinstance(result, Failure):
                return result
            raw = result.value.get("authorization_model")
        else:
            result = await self._store_request(
                method="GET",
                path="/authorization-models",
                params={"page_size": "1"},
                operation="read_model",
            )
            if isinstance(result, Failure):
                return result
            models = result.value.get("authorization_models") or []
            raw = models[0] if models else None

        if not isinstance(raw, dict):
            return Failure(
                error=ModelUnavailableError(
                    code=ErrorCode.MODEL_UNAVAILABLE,
                    message="No authorization model found in the store",
                    operation="read_model",
                    details={"store_id": self._store_id, "model_id": self._model_id},
                )
            )

        try:
            return Success(value=AuthorizationModel.from_dict(raw))
        except ValueError as e:
            return Failure(
                error=ModelUnavailableError(
                    code=ErrorCode.MODEL_UNAVAILABLE,
                    message=f"Store returned an unreadable authorization model: {e}",
                    operation="read_model",
                )
            )

    async def compare_model(
        self, model: AuthorizationModel
    ) -> Result[bool, AuthorizationStoreError]:
        """Return whether the active model structurally equals ``model``."""
        current = await self.read_model()
        if isinstance(current, Failure):
            return current
        return Success(value=current.value.matches(model))

    async def validate_model(
        self, expected: AuthorizationModel
    ) -> Result[None, AuthorizationStoreError]:
        """Require the active model to equal ``expected``.

        Returns:
            Success(None): Models match.
            Failure(ModelUnavailableError): Active model could not be read.
            Failure(ModelMismatchError): Models differ.
        """
        current = await self.read_model()
        if isinstance(current, Failure):
            error = current.error
            if isinstance(error, ModelUnavailableError):
                return current
            return Failure(
                error=ModelUnavailableError(
                    code=ErrorCode.MODEL_UNAVAILABLE,
                    message=f"Cannot read the active authorization model: {error.message}",
                    operation="validate_model",
                    details={"cause": error.code.value},
                )
            )

        mismatch = current.value.diff(expected)
        if mismatch is not None:
            self._logger.error(
                "openfga_model_mismatch",
                store_id=self._store_id,
                model_id=current.value.id,
                mismatch=mismatch,
            )
            return Failure(
                error=ModelMismatchError(
                    code=ErrorCode.MODEL_MISMATCH,
                    message=f"Active authorization model differs in {mismatch}",
                    operation="validate_model",
                    model_id=current.value.id,
                    mismatch=mismatch,
                )
            )

        return Success(value=None)

    # =========================================================================
    # Tuples
    # =========================================================================

    async def write_tuples(
        self, *tuples: RelationshipTuple
    ) -> Result[None, AuthorizationStoreError]:
        """Write tuples, at most MAX_TUPLES_PER_WRITE per request.

        Chunks are not atomic with each other: on failure, earlier chunks
        stay written.
        """
        return await self._mutate("writes", tuples, operation="write_tuples")

    async def delete_tuples(
        self, *tuples: RelationshipTuple
    ) -> Result[None, AuthorizationStoreError]:
        """Delete tuples, at most MAX_TUPLES_PER_WRITE per request."""
        return await self._mutate("deletes", tuples, operation="delete_tuples")

    async def read_tuples(
        self,
        *,
        user: str = "",
        relation: str = "",
        object: str = "",
        continuation_token: str = "",
    ) -> Result[TuplePage, AuthorizationStoreError]:
        body: dict[str, Any] = {"page_size": READ_PAGE_SIZE}
        key = {
            name: value
            for name, value in (("user", user), ("relation", relation), ("object", object))
            if value
        }
        if key:
            body["tuple_key"] = key
        if continuation_token:
            body["continuation_token"] = continuation_token

        result = await self._store_request(
            method="POST", path="/read", json_data=body, operation="read_tuples"
        )
        if isinstance(result, Failure):
            return result

        tuples = [
            RelationshipTuple.from_key(entry.get("key") or {})
            for entry in result.value.get("tuples") or []
        ]
        return Success(
            value=TuplePage(
                tuples=tuples,
                continuation_token=str(result.value.get("continuation_token") or ""),
            )
        )

    # =========================================================================
    # Queries
    # =========================================================================

    async def check(
        self,
        user: str,
        relation: str,
        object: str,
        *contextual_tuples: RelationshipTuple,
    ) -> Result[bool, AuthorizationStoreError]:
        body: dict[str, Any] = {
            "tuple_key": {"user": user, "relation": relation, "object": object}
        }
        if contextual_tuples:
            body["contextual_tuples"] = {
                "tuple_keys": [t.to_key() for t in contextual_tuples]
            }
        self._with_model_id(body)

        result = await self._store_request(
            method="POST", path="/check", json_data=body, operation="check"
        )
        if isinstance(result, Failure):
            return result
        return Success(value=bool(result.value.get("allowed", False)))

    async def list_objects(
        self, user: str, relation: str, object_type: str
    ) -> Result[list[str], AuthorizationStoreError]:
        body: dict[str, Any] = {"type": object_type, "relation": relation, "user": user}
        self._with_model_id(body)

        result = await self._store_request(
            method="POST", path="/list-objects", json_data=body, operation="list_objects"
        )
        if isinstance(result, Failure):
            return result

        prefix = f"{object_type}:"
        return Success(
            value=[
                obj.removeprefix(prefix) for obj in result.value.get("objects") or []
            ]
        )

    # =========================================================================
    # HTTP plumbing
    # =========================================================================

    async def _mutate(
        self,
        field: str,
        tuples: Sequence[RelationshipTuple],
        *,
        operation: str,
    ) -> Result[None, AuthorizationStoreError]:
        for chunk in _chunks(tuples, MAX_TUPLES_PER_WRITE):
            body: dict[str, Any] = {field: {"tuple_keys": [t.to_key() for t in chunk]}}
            self._with_model_id(body)
            result = await self._store_request(
                method="POST", path="/write", json_data=body, operation=operation
            )
            if isinstance(result, Failure):
                return result
        return Success(value=None)

    def _with_model_id(self, body: dict[str, Any]) -> None:
        if self._model_id:
            body["authorization_model_id"] = self._model_id

    async def _store_request(
        self,
        *,
        method: str,
        path: str,
        operation: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> Result[dict[str, Any], AuthorizationStoreError]:
        if not self._store_id:
            return Failure(
                error=StoreUnavailableError(
                    code=ErrorCode.STORE_NOT_CONFIGURED,
                    message="OpenFGA store id is not configured",
                    operation=operation,
                    is_transient=False,
                )
            )
        return await self._request(
            method=method,
            path=f"/stores/{self._store_id}{path}",
            operation=operation,
            params=params,
            json_data=json_data,
        )

    async def _request(
        self,
        *,
        method: str,
        path: str,
        operation: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> Result[dict[str, Any], AuthorizationStoreError]:
        with traced(
            self._tracer,
            f"openfga.{operation}",
            **{"http.method": method, "openfga.store_id": self._store_id or None},
        ) as span:
            response = await self._execute_request(
                method=method,
                path=path,
                params=params,
                json_data=json_data,
                operation=operation,
            )
            if isinstance(response, Failure):
                span.set_status(Status(StatusCode.ERROR, response.error.message))
                return response
            span.set_attribute("http.status_code", response.value.status_code)
            parsed = self._parse_json_object(response.value, operation)
            if isinstance(parsed, Failure):
                span.set_status(Status(StatusCode.ERROR, parsed.error.message))
            return parsed

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self._api_token:
                headers["Authorization"] = f"{BEARER_PREFIX}{self._api_token}"
            self._client = httpx.AsyncClient(
                base_url=self._api_url, headers=headers, timeout=self._timeout
            )
        return self._client

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[httpx.Response, AuthorizationStoreError]:
        """Execute HTTP request with error handling.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(StoreUnavailableError): On timeout or connection error.
        """
        try:
            response = await self._get_client().request(
                method=method, url=path, params=params, json=json_data
            )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning("openfga_timeout", operation=operation, error=str(e))
            return Failure(
                error=self._unavailable(operation, "OpenFGA request timed out")
            )

        except httpx.RequestError as e:
            self._logger.warning(
                "openfga_connection_error", operation=operation, error=str(e)
            )
            return Failure(
                error=self._unavailable(operation, f"Failed to connect to OpenFGA: {e}")
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[AuthorizationStoreError] | None:
        """Check HTTP response for errors and return the matching store error.

        Returns:
            Failure(AuthorizationStoreError) if error detected, None if response is OK.
        """
        status = response.status_code

        if 200 <= status < 300:
            return None

        details = {
            "status_code": status,
            "response_body": response.text[:RESPONSE_BODY_MAX_LENGTH],
        }

        if status in (401, 403):
            self._logger.warning(
                "openfga_unauthorized", operation=operation, status_code=status
            )
            return Failure(
                error=StoreUnauthorizedError(
                    code=ErrorCode.STORE_UNAUTHORIZED,
                    message="OpenFGA rejected the API credentials",
                    operation=operation,
                    details=details,
                )
            )

        if status in (400, 422):
            self._logger.warning(
                "openfga_validation_error",
                operation=operation,
                status_code=status,
                response_body=details["response_body"],
            )
            if operation in _MODEL_OPERATIONS:
                return Failure(
                    error=InvalidModelError(
                        code=ErrorCode.MODEL_INVALID,
                        message="OpenFGA rejected the authorization model",
                        operation=operation,
                        details=details,
                    )
                )
            return Failure(
                error=InvalidTupleError(
                    code=ErrorCode.TUPLE_INVALID,
                    message="OpenFGA rejected the relationship tuples",
                    operation=operation,
                    details=details,
                )
            )

        if status == 404 and operation == "read_model":
            self._logger.warning("openfga_model_not_found", operation=operation)
            return Failure(
                error=ModelUnavailableError(
                    code=ErrorCode.MODEL_UNAVAILABLE,
                    message="OpenFGA authorization model not found",
                    operation=operation,
                    details=details,
                )
            )

        self._logger.warning(
            "openfga_unexpected_status", operation=operation, status_code=status
        )
        return Failure(
            error=StoreUnavailableError(
                code=ErrorCode.STORE_UNAVAILABLE,
                message=f"OpenFGA returned status {status}",
                operation=operation,
                details=details,
                is_transient=status >= 500 or status == 429,
            )
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], AuthorizationStoreError]:
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        if not response.content:
            return Success(value={})

        try:
            data = response.json()
        except ValueError as e:
            self._logger.error(
                "openfga_invalid_json", operation=operation, error_message=str(e)
            )
            return Failure(
                error=self._unavailable(operation, "Invalid JSON response from OpenFGA")
            )

        if not isinstance(data, dict):
            return Failure(
                error=self._unavailable(
                    operation, "Expected object response from OpenFGA"
                )
            )

        return Success(value=data)

    def _unavailable(self, operation: str, message: str) -> StoreUnavailableError:
        return StoreUnavailableError(
            code=ErrorCode.STORE_UNAVAILABLE,
            message=message,
            operation=operation,
        )


def _chunks(
    items: Sequence[RelationshipTuple], size: int
) -> Iterator[Sequence[RelationshipTuple]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]
