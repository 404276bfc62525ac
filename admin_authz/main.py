"""
Main FastAPI application entry point.

The lifespan builds the authorization runtime, starts the entitlement
pool and refuses to start serving when the store's authorization model is
missing or differs from the packaged one. On shutdown the pool is drained
and the store client closed.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from admin_authz.core.config import get_settings
from admin_authz.core.container import build_runtime
from admin_authz.presentation.middleware import PrincipalMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: Start worker pool, validate authorization model (fatal on failure)
    - Shutdown: Drain entitlement tasks, close store connections

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    runtime = build_runtime(get_settings())
    await runtime.start()
    app.state.runtime = runtime
    app.state.authorizer = runtime.authorizer

    yield

    await runtime.close()


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()
    application = FastAPI(
        title=settings.app_name,
        description="Entitlement synchronization for the identity admin gateway",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(PrincipalMiddleware)

    @application.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """
        Health check endpoint for monitoring and load balancers.

        Returns:
            dict: Authorizer state and worker pool statistics.
        """
        runtime = request.app.state.runtime
        return {
            "status": "healthy",
            "authorization_enabled": settings.authorization_enabled,
            "authorizer": runtime.authorizer.state.value,
            "pool": runtime.pool.stats().to_dict(),
        }

    return application


app = create_app()
