"""Metrics and tracing instruments."""

from admin_authz.infrastructure.observability.metrics import PoolMetrics
from admin_authz.infrastructure.observability.tracing import get_tracer, traced

__all__ = ["PoolMetrics", "get_tracer", "traced"]
