"""Unit tests for the composition root.

Tests cover:
- Store client selection (noop vs. OpenFGA)
- Worker pool sizing from settings
- Runtime start (READY) and refusal to start on model mismatch
"""

import pytest

from admin_authz.application.services import Authorizer
from admin_authz.core.config import Settings
from admin_authz.core.container import (
    AuthorizationRuntime,
    build_runtime,
    create_store_client,
    create_worker_pool,
)
from admin_authz.domain.entities import AuthorizationModel
from admin_authz.domain.enums import AuthorizerState
from admin_authz.infrastructure.openfga import NoopAuthorizationClient, OpenFGAClient
from admin_authz.infrastructure.pool import AsyncWorkerPool


def make_settings(**overrides) -> Settings:
    values = {
        "authorization_enabled": False,
        "authorization_workers_total": 3,
        "authorization_queue_size": 10,
        "authorization_shutdown_timeout_seconds": 1.0,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.unit
class TestStoreClientSelection:
    """create_store_client()."""

    def test_noop_when_authorization_disabled(self, mock_logger):
        store = create_store_client(
            make_settings(openfga_store_id="s1"), mock_logger
        )

        assert isinstance(store, NoopAuthorizationClient)
        assert store.store_id == "s1"
        mock_logger.info.assert_called_once_with(
            "authorization_disabled", store_client="noop"
        )

    async def test_openfga_when_authorization_enabled(self, mock_logger):
        store = create_store_client(
            make_settings(
                authorization_enabled=True,
                openfga_store_id="s1",
                openfga_authorization_model_id="m1",
            ),
            mock_logger,
        )

        assert isinstance(store, OpenFGAClient)
        assert store.store_id == "s1"
        assert store.model_id == "m1"
        await store.aclose()


@pytest.mark.unit
class TestWorkerPoolCreation:
    """create_worker_pool()."""

    def test_pool_sized_from_settings(self, mock_logger, registry):
        pool = create_worker_pool(make_settings(), mock_logger, registry)

        stats = pool.stats()
        assert isinstance(pool, AsyncWorkerPool)
        assert stats.workers == 3
        assert stats.queue_size == 10
        assert stats.closed is False


@pytest.mark.unit
class TestAuthorizationRuntime:
    """build_runtime() and runtime lifecycle."""

    async def test_start_and_close_with_noop_store(self, mock_logger, registry):
        runtime = build_runtime(make_settings(), logger=mock_logger, registry=registry)

        await runtime.start()
        assert runtime.authorizer.state is AuthorizerState.READY

        await runtime.close()
        assert runtime.authorizer.state is AuthorizerState.STOPPED
        assert runtime.pool.closed is True

    async def test_start_refuses_mismatched_model(
        self, mock_logger, registry, fake_store
    ):
        fake_store.model = AuthorizationModel(schema_version="1.1", id="old")
        pool = create_worker_pool(make_settings(), mock_logger, registry)
        runtime = AuthorizationRuntime(
            store=fake_store,
            pool=pool,
            authorizer=Authorizer(store=fake_store, pool=pool, logger=mock_logger),
            logger=mock_logger,
        )

        with pytest.raises(RuntimeError, match="Authorization model validation failed"):
            await runtime.start()

        assert pool.closed is True
        assert runtime.authorizer.state is AuthorizerState.STOPPED
