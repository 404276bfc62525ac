"""Integration tests for OpenFGAClient against a mocked OpenFGA HTTP API.

Tests cover:
- Store and model provisioning (create_store, write_model, read_model)
- Model validation (match, mismatch, unreadable)
- Tuple writes/deletes (body shape, chunking) and paginated reads
- check/list_objects
- Status code mapping and transport errors

Architecture:
- pytest-httpx intercepts the client's httpx.AsyncClient
- MagicMock logger
"""

import json

import httpx
import pytest

from admin_authz.core.enums import ErrorCode
from admin_authz.core.result import Failure, Success
from admin_authz.domain.authorization import AUTH_MODEL
from admin_authz.domain.entities import RelationshipTuple
from admin_authz.domain.errors import (
    InvalidModelError,
    InvalidTupleError,
    ModelMismatchError,
    ModelUnavailableError,
    StoreUnauthorizedError,
    StoreUnavailableError,
)
from admin_authz.infrastructure.openfga import OpenFGAClient

API_URL = "http://openfga.test:8080"
STORE = "01HSTORE"
MODEL = "01HMODEL"
STORE_URL = f"{API_URL}/stores/{STORE}"


def owner(user: str, obj: str) -> RelationshipTuple:
    return RelationshipTuple(user=f"user:{user}", relation="owner", object=obj)


def body_of(request: httpx.Request) -> dict:
    return json.loads(request.content)


@pytest.fixture
async def client(mock_logger):
    async with OpenFGAClient(
        api_url=API_URL, api_token="secret", store_id=STORE, logger=mock_logger
    ) as client:
        yield client


@pytest.fixture
async def pinned_client(mock_logger):
    async with OpenFGAClient(
        api_url=API_URL, store_id=STORE, model_id=MODEL, logger=mock_logger
    ) as client:
        yield client


@pytest.mark.integration
class TestProvisioning:
    """create_store() and write_model()."""

    async def test_create_store_points_client_at_new_store(self, httpx_mock, mock_logger):
        httpx_mock.add_response(
            method="POST", url=f"{API_URL}/stores", json={"id": "01HNEW", "name": "ui"}
        )
        client = OpenFGAClient(api_url=API_URL, logger=mock_logger)

        result = await client.create_store("ui")
        await client.aclose()

        assert result == Success(value="01HNEW")
        assert client.store_id == "01HNEW"
        assert body_of(httpx_mock.get_request()) == {"name": "ui"}

    async def test_write_model_sets_model_id(self, client, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{STORE_URL}/authorization-models",
            status_code=201,
            json={"authorization_model_id": MODEL},
        )

        result = await client.write_model(AUTH_MODEL)

        assert result == Success(value=MODEL)
        assert client.model_id == MODEL
        sent = body_of(httpx_mock.get_request())
        assert sent["schema_version"] == "1.1"
        assert len(sent["type_definitions"]) == len(AUTH_MODEL.type_definitions)

    async def test_write_model_rejected(self, client, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{STORE_URL}/authorization-models",
            status_code=400,
            json={"code": "invalid_authorization_model"},
        )

        result = await client.write_model(AUTH_MODEL)

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidModelError)
        assert result.error.details["status_code"] == 400

    async def test_store_id_required(self, mock_logger, httpx_mock):
        client = OpenFGAClient(api_url=API_URL, logger=mock_logger)

        result = await client.write_tuples(owner("alice", "client:c1"))

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.STORE_NOT_CONFIGURED
        assert result.error.is_transient is False
        assert httpx_mock.get_requests() == []


@pytest.mark.integration
class TestModelReadAndValidation:
    """read_model(), compare_model() and validate_model()."""

    async def test_read_latest_model(self, client, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models?page_size=1",
            json={"authorization_models": [AUTH_MODEL.to_dict() | {"id": "01HLATEST"}]},
        )

        result = await client.read_model()

        assert isinstance(result, Success)
        assert result.value.id == "01HLATEST"

    async def test_read_pinned_model(self, pinned_client, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models/{MODEL}",
            json={"authorization_model": AUTH_MODEL.to_dict() | {"id": MODEL}},
        )

        result = await pinned_client.read_model()

        assert isinstance(result, Success)
        assert result.value.id == MODEL

    async def test_store_without_models(self, client, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models?page_size=1",
            json={"authorization_models": []},
        )

        result = await client.read_model()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ModelUnavailableError)

    async def test_pinned_model_not_found(self, pinned_client, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models/{MODEL}",
            status_code=404,
            json={"code": "authorization_model_not_found"},
        )

        result = await pinned_client.read_model()

        assert isinstance(result, Failure)
        assert isinstance(result.error, ModelUnavailableError)

    async def test_validate_matching_model(self, pinned_client, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models/{MODEL}",
            json={"authorization_model": AUTH_MODEL.to_dict() | {"id": MODEL}},
        )

        assert await pinned_client.validate_model(AUTH_MODEL) == Success(value=None)

    async def test_validate_mismatched_model(self, pinned_client, httpx_mock, mock_logger):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models/{MODEL}",
            json={
                "authorization_model": {
                    "id": MODEL,
                    "schema_version": "1.1",
                    "type_definitions": [{"type": "user"}],
                }
            },
        )

        result = await pinned_client.validate_model(AUTH_MODEL)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ModelMismatchError)
        assert result.error.model_id == MODEL
        assert result.error.mismatch == "type_definitions"
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args == ("openfga_model_mismatch",)

    async def test_validate_unreachable_store(self, client, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models?page_size=1",
            status_code=503,
        )

        result = await client.validate_model(AUTH_MODEL)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ModelUnavailableError)
        assert result.error.details == {"cause": "store_unavailable"}

    async def test_compare_model(self, client, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{STORE_URL}/authorization-models?page_size=1",
            json={"authorization_models": [AUTH_MODEL.to_dict()]},
        )

        assert await client.compare_model(AUTH_MODEL) == Success(value=True)


@pytest.mark.integration
class TestTuples:
    """write_tuples(), delete_tuples() and read_tuples()."""

    async def test_write_sends_tuple_keys_and_bearer_token(self, client, httpx_mock):
        httpx_mock.add_response(method="POST", url=f"{STORE_URL}/write", json={})

        result = await client.write_tuples(owner("alice", "client:c1"))

        assert result == Success(value=None)
        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == "Bearer secret"
        assert body_of(request) == {
            "writes": {
                "tuple_keys": [
                    {"user": "user:alice", "relation": "owner", "object": "client:c1"}
                ]
            }
        }

    async def test_delete_pins_model_id(self, pinned_client, httpx_mock):
        httpx_mock.add_response(method="POST", url=f"{STORE_URL}/write", json={})

        await pinned_client.delete_tuples(owner("alice", "rule:r1"))

        sent = body_of(httpx_mock.get_request())
        assert sent["authorization_model_id"] == MODEL
        assert sent["deletes"]["tuple_keys"][0]["object"] == "rule:r1"
        assert "Authorization" not in httpx_mock.get_request().headers

    async def test_large_writes_are_chunked(self, client, httpx_mock):
        httpx_mock.add_response(method="POST", url=f"{STORE_URL}/write", json={})
        httpx_mock.add_response(method="POST", url=f"{STORE_URL}/write", json={})
        tuples = [owner(f"u{i}", "client:c1") for i in range(150)]

        result = await client.write_tuples(*tuples)

        assert result == Success(value=None)
        sizes = [
            len(body_of(r)["writes"]["tuple_keys"]) for r in httpx_mock.get_requests()
        ]
        assert sizes == [100, 50]

    async def test_write_rejected_tuple(self, client, httpx_mock, mock_logger):
        httpx_mock.add_response(
            method="POST",
            url=f"{STORE_URL}/write",
            status_code=400,
            json={"code": "write_failed_due_to_invalid_input"},
        )

        result = await client.write_tuples(owner("alice", "client:c1"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidTupleError)
        assert result.error.operation == "write_tuples"
        assert "write_failed_due_to_invalid_input" in result.error.details["response_body"]

    async def test_read_tuples_filters_and_paginates(self, client, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{STORE_URL}/read",
            json={
                "tuples": [
                    {
                        "key": {
                            "user": "user:alice",
                            "relation": "owner",
                            "object": "client:c1",
                        },
                        "timestamp": "2026-01-01T00:00:00Z",
                    }
                ],
                "continuation_token": "next",
            },
        )

        result = await client.read_tuples(object="client:c1", continuation_token="prev")

        assert isinstance(result, Success)
        assert result.value.tuples == [owner("alice", "client:c1")]
        assert result.value.continuation_token == "next"
        assert body_of(httpx_mock.get_request()) == {
            "page_size": 100,
            "tuple_key": {"object": "client:c1"},
            "continuation_token": "prev",
        }


@pytest.mark.integration
class TestQueries:
    """check() and list_objects()."""

    async def test_check_with_contextual_tuples(self, pinned_client, httpx_mock):
        httpx_mock.add_response(
            method="POST", url=f"{STORE_URL}/check", json={"allowed": True}
        )
        contextual = owner("alice", "client:c1")

        result = await pinned_client.check("user:alice", "can_view", "client:c1", contextual)

        assert result == Success(value=True)
        assert body_of(httpx_mock.get_request()) == {
            "tuple_key": {"user": "user:alice", "relation": "can_view", "object": "client:c1"},
            "contextual_tuples": {"tuple_keys": [contextual.to_key()]},
            "authorization_model_id": MODEL,
        }

    async def test_check_denied(self, client, httpx_mock):
        httpx_mock.add_response(
            method="POST", url=f"{STORE_URL}/check", json={"allowed": False}
        )

        assert await client.check("user:bob", "can_edit", "rule:r1") == Success(value=False)

    async def test_list_objects_strips_type_prefix(self, client, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{STORE_URL}/list-objects",
            json={"objects": ["client:c1", "client:c2"]},
        )

        result = await client.list_objects("user:alice", "can_view", "client")

        assert result == Success(value=["c1", "c2"])
        assert body_of(httpx_mock.get_request()) == {
            "type": "client",
            "relation": "can_view",
            "user": "user:alice",
        }


@pytest.mark.integration
class TestErrorMapping:
    """HTTP status and transport error mapping."""

    @pytest.mark.parametrize("status", [401, 403])
    async def test_unauthorized(self, client, httpx_mock, status):
        httpx_mock.add_response(method="POST", url=f"{STORE_URL}/check", status_code=status)

        result = await client.check("user:alice", "can_view", "client:c1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreUnauthorizedError)

    @pytest.mark.parametrize(
        ("status", "transient"), [(500, True), (503, True), (429, True), (404, False)]
    )
    async def test_unexpected_status(self, client, httpx_mock, status, transient):
        httpx_mock.add_response(method="POST", url=f"{STORE_URL}/write", status_code=status)

        result = await client.write_tuples(owner("alice", "client:c1"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreUnavailableError)
        assert result.error.is_transient is transient
        assert result.error.details["status_code"] == status

    async def test_timeout(self, client, httpx_mock, mock_logger):
        httpx_mock.add_exception(httpx.ReadTimeout("read timed out"))

        result = await client.write_tuples(owner("alice", "client:c1"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreUnavailableError)
        assert result.error.message == "OpenFGA request timed out"
        assert mock_logger.warning.call_args.args == ("openfga_timeout",)

    async def test_connection_error(self, client, httpx_mock, mock_logger):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        result = await client.check("user:alice", "can_view", "client:c1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreUnavailableError)
        assert "connection refused" in result.error.message
        assert mock_logger.warning.call_args.args == ("openfga_connection_error",)

    async def test_invalid_json(self, client, httpx_mock):
        httpx_mock.add_response(
            method="POST", url=f"{STORE_URL}/check", content=b"<html>proxy error</html>"
        )

        result = await client.check("user:alice", "can_view", "client:c1")

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid JSON response from OpenFGA"

    async def test_non_object_json(self, client, httpx_mock):
        httpx_mock.add_response(method="POST", url=f"{STORE_URL}/check", json=["allowed"])

        result = await client.check("user:alice", "can_view", "client:c1")

        assert isinstance(result, Failure)
        assert result.error.message == "Expected object response from OpenFGA"
