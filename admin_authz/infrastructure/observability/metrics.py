"""Prometheus metrics for the entitlement worker pool.

Metrics are registered on an injectable CollectorRegistry so tests (and
several pools in one process) never collide on the global default registry.

Usage:
    from prometheus_client import CollectorRegistry

    metrics = PoolMetrics.create(registry=CollectorRegistry())
    metrics.submitted.inc()
    with metrics.duration.time():
        ...
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

_DURATION_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)

_METRICS_CACHE: weakref.WeakKeyDictionary[CollectorRegistry, dict[str, PoolMetrics]] = (
    weakref.WeakKeyDictionary()
)


@dataclass
class PoolMetrics:
    """Prometheus instruments for one worker pool.

    Attributes:
        submitted: Tasks accepted into the queue.
        completed: Tasks that finished without raising.
        failed: Tasks that raised or exceeded the task timeout.
        rejected: Submissions refused, labeled by reason (saturated, closed).
        queue_depth: Tasks waiting in the queue.
        active_workers: Workers currently running a task.
        duration: Task execution time in seconds.
    """

    submitted: Counter
    completed: Counter
    failed: Counter
    rejected: Counter
    queue_depth: Gauge
    active_workers: Gauge
    duration: Histogram

    @classmethod
    def create(
        cls,
        *,
        registry: CollectorRegistry | None = None,
        namespace: str = "admin_authz",
    ) -> PoolMetrics:
        """Create or retrieve the pool instruments registered on ``registry``.

        Instruments are cached per registry and namespace, so building a
        second pool (or a second app in tests) never registers a metric twice.

        Args:
            registry: Target registry. Defaults to the process-wide registry.
            namespace: Metric name prefix.

        Returns:
            PoolMetrics: Registered instruments.
        """
        target = registry if registry is not None else REGISTRY
        cached = _METRICS_CACHE.setdefault(target, {})
        if namespace in cached:
            return cached[namespace]

        metrics = cls(
            submitted=Counter(
                "pool_tasks_submitted_total",
                "Tasks accepted by the worker pool",
                namespace=namespace,
                registry=target,
            ),
            completed=Counter(
                "pool_tasks_completed_total",
                "Tasks completed without error",
                namespace=namespace,
                registry=target,
            ),
            failed=Counter(
                "pool_tasks_failed_total",
                "Tasks that raised or timed out",
                namespace=namespace,
                registry=target,
            ),
            rejected=Counter(
                "pool_tasks_rejected_total",
                "Submissions refused by the worker pool",
                ["reason"],
                namespace=namespace,
                registry=target,
            ),
            queue_depth=Gauge(
                "pool_queue_depth",
                "Tasks waiting in the worker pool queue",
                namespace=namespace,
                registry=target,
            ),
            active_workers=Gauge(
                "pool_active_workers",
                "Workers currently executing a task",
                namespace=namespace,
                registry=target,
            ),
            duration=Histogram(
                "pool_task_duration_seconds",
                "Worker pool task execution time",
                namespace=namespace,
                registry=target,
                buckets=_DURATION_BUCKETS,
            ),
        )
        cached[namespace] = metrics
        return metrics
