"""Background task execution."""

from admin_authz.infrastructure.pool.worker_pool import AsyncWorkerPool, PoolStats

__all__ = ["AsyncWorkerPool", "PoolStats"]
