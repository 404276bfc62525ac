"""Composition root.

Builds the authorization runtime from Settings. Everything is passed by
constructor injection: there is no module-level pool or client, so tests
and tools can build as many independent runtimes as they need. Only the
logger is cached process-wide.

Usage:
    runtime = build_runtime(get_settings())
    await runtime.start()          # pool up, model validated
    ...
    await runtime.close()          # drain pool, close HTTP client
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry

from admin_authz.core.config import Settings, get_settings
from admin_authz.core.result import Failure

if TYPE_CHECKING:
    from admin_authz.application.services import Authorizer
    from admin_authz.domain.protocols import LoggerProtocol
    from admin_authz.infrastructure.openfga import NoopAuthorizationClient, OpenFGAClient
    from admin_authz.infrastructure.pool import AsyncWorkerPool


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get logger singleton (app-scoped).

    Console output in development, JSON everywhere else.
    """
    from admin_authz.infrastructure.logging import StructlogAdapter

    settings = get_settings()
    level = "DEBUG" if settings.debug else settings.log_level
    return StructlogAdapter(level=level, use_json=not settings.is_development)


def create_store_client(
    settings: Settings, logger: "LoggerProtocol"
) -> "OpenFGAClient | NoopAuthorizationClient":
    """Return the OpenFGA client, or the noop client when authorization is off."""
    from admin_authz.infrastructure.openfga import NoopAuthorizationClient, OpenFGAClient

    if not settings.authorization_enabled:
        logger.info("authorization_disabled", store_client="noop")
        return NoopAuthorizationClient(
            store_id=settings.openfga_store_id,
            model_id=settings.openfga_authorization_model_id,
        )

    return OpenFGAClient(
        api_url=settings.openfga_api_url,
        api_token=settings.openfga_api_token,
        store_id=settings.openfga_store_id,
        model_id=settings.openfga_authorization_model_id,
        timeout=settings.openfga_request_timeout_seconds,
        logger=logger,
    )


def create_worker_pool(
    settings: Settings,
    logger: "LoggerProtocol",
    registry: CollectorRegistry | None = None,
) -> "AsyncWorkerPool":
    """Return an unstarted worker pool sized from settings."""
    from admin_authz.infrastructure.observability import PoolMetrics
    from admin_authz.infrastructure.pool import AsyncWorkerPool

    return AsyncWorkerPool(
        settings.authorization_workers_total,
        logger=logger,
        queue_size=settings.authorization_queue_size,
        submit_timeout=settings.authorization_submit_timeout_seconds,
        task_timeout=settings.authorization_task_timeout_seconds,
        shutdown_timeout=settings.authorization_shutdown_timeout_seconds,
        metrics=PoolMetrics.create(registry=registry),
    )


@dataclass
class AuthorizationRuntime:
    """Store client, worker pool and Authorizer of one process.

    The Authorizer owns the pool; the runtime owns the client's connections.
    """

    store: "OpenFGAClient | NoopAuthorizationClient"
    pool: "AsyncWorkerPool"
    authorizer: "Authorizer"
    logger: "LoggerProtocol"

    async def start(self) -> None:
        """Start the pool and validate the authorization model.

        Raises:
            RuntimeError: If the store's model is missing or differs.
        """
        self.pool.start()
        result = await self.authorizer.validate_model()
        if isinstance(result, Failure):
            await self.close()
            raise RuntimeError(
                f"Authorization model validation failed: {result.error}"
            )

    async def close(self) -> None:
        await self.authorizer.shutdown()
        await self.store.aclose()


def build_runtime(
    settings: Settings,
    *,
    logger: "LoggerProtocol | None" = None,
    registry: CollectorRegistry | None = None,
) -> AuthorizationRuntime:
    """Wire the runtime. Nothing is started.

    Args:
        settings: Application settings.
        logger: Logger (defaults to get_logger()).
        registry: Prometheus registry for pool metrics (defaults to the
            process-wide registry).
    """
    from admin_authz.application.services import Authorizer

    log = logger if logger is not None else get_logger()
    store = create_store_client(settings, log)
    pool = create_worker_pool(settings, log, registry)
    authorizer = Authorizer(
        store=store,
        pool=pool,
        logger=log,
        submit_timeout=settings.authorization_submit_timeout_seconds,
    )
    return AuthorizationRuntime(
        store=store, pool=pool, authorizer=authorizer, logger=log
    )
