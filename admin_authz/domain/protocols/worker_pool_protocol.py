"""Worker pool protocol (port).

A bounded pool executing zero-argument tasks in the background. Callers
submit and forget: there is no result channel, a task is responsible for
logging its own failure.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from admin_authz.core.result import Result
from admin_authz.domain.errors import WorkerPoolError

Task = Callable[[], Awaitable[Any] | Any]
"""Zero-argument unit of work.

Either a coroutine function (awaited on the event loop) or a plain
callable (run on a worker thread so it cannot stall the loop).
"""


class WorkerPoolProtocol(Protocol):
    """Bounded background task executor."""

    async def submit(
        self, task: Task, *, timeout: float | None = None
    ) -> Result[str, WorkerPoolError]:
        """Enqueue ``task``; return a task id for log correlation.

        Waits at most ``timeout`` seconds for room in a full queue, then
        fails with PoolSaturatedError. Fails with PoolClosedError once the
        pool is stopping.
        """
        ...

    async def stop(self) -> None:
        """Stop accepting tasks and drain the queue within the grace period."""
        ...
