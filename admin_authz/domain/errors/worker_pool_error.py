"""Worker pool submission errors.

Task execution errors never surface here: the pool has no return channel
for them. These only describe why a task could not be enqueued.
"""

from dataclasses import dataclass

from admin_authz.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class WorkerPoolError(DomainError):
    """Base worker pool error."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class PoolSaturatedError(WorkerPoolError):
    """Queue stayed full until the submitter's deadline elapsed.

    Attributes:
        queue_size: Capacity of the queue at the time of the rejection.
        waited_seconds: Time the submitter waited for room.
    """

    queue_size: int
    waited_seconds: float


@dataclass(frozen=True, slots=True, kw_only=True)
class PoolClosedError(WorkerPoolError):
    """Pool is stopping or stopped and accepts no more tasks."""

    pass
