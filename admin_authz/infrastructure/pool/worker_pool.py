"""Bounded asyncio worker pool.

Fixed number of worker tasks pulling from one bounded asyncio.Queue.
Submitters enqueue and move on; nothing is ever returned to them about
the execution of the task.

Execution rules:
- Coroutine functions are awaited on the event loop.
- Plain callables run on the default thread executor (asyncio.to_thread),
  so blocking client code cannot stall the loop. If a plain callable
  returns an awaitable, it is awaited on the loop.
- A task that raises or exceeds ``task_timeout`` is logged and counted.
  The worker then continues with the next task.

Shutdown:
    stop() closes submission, waits for queued and running tasks up to
    ``shutdown_timeout``, then cancels the workers. Tasks still queued or
    running past the deadline are abandoned (a plain callable already on
    a thread keeps running until it returns; it is no longer awaited).

Usage:
    pool = AsyncWorkerPool(workers=150, logger=logger)
    pool.start()
    result = await pool.submit(write_entitlements, timeout=2.0)
    ...
    await pool.stop()
"""

from __future__ import annotations

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from opentelemetry.trace import Tracer

from admin_authz.core.constants import (
    POOL_QUEUE_SIZE_DEFAULT,
    POOL_SHUTDOWN_TIMEOUT_DEFAULT,
)
from admin_authz.core.enums import ErrorCode
from admin_authz.core.result import Failure, Result, Success
from admin_authz.domain.errors import (
    PoolClosedError,
    PoolSaturatedError,
    WorkerPoolError,
)
from admin_authz.domain.protocols import LoggerProtocol, Task
from admin_authz.infrastructure.observability import PoolMetrics, get_tracer, traced


@dataclass(frozen=True, slots=True)
class _QueuedTask:
    task_id: str
    task: Task


@dataclass
class PoolStats:
    """Point-in-time worker pool counters.

    Attributes:
        workers: Configured worker count.
        queue_size: Queue capacity.
        queue_depth: Tasks currently waiting.
        active_workers: Workers currently executing a task.
        submitted: Tasks accepted since start.
        completed: Tasks finished without error.
        failed: Tasks that raised or timed out.
        rejected: Submissions refused (saturated or closed).
        abandoned: Tasks dropped by a shutdown that ran out of time.
        closed: Whether the pool stopped accepting tasks.
    """

    workers: int
    queue_size: int
    queue_depth: int
    active_workers: int
    submitted: int
    completed: int
    failed: int
    rejected: int
    abandoned: int
    closed: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary for JSON serialization."""
        return {
            "workers": self.workers,
            "queue_size": self.queue_size,
            "queue_depth": self.queue_depth,
            "active_workers": self.active_workers,
            "submitted": self.submitted,
            "completed": self.completed,
            "failed": self.failed,
            "rejected": self.rejected,
            "abandoned": self.abandoned,
            "closed": self.closed,
        }


class AsyncWorkerPool:
    """Fixed-size pool of asyncio workers sharing one bounded queue.

    Implements WorkerPoolProtocol via structural typing.

    Attributes:
        _size: Number of workers spawned by start().
        _queue: Shared bounded task queue.
        _submit_timeout: Default wait for room in a full queue (None waits
            indefinitely).
        _task_timeout: Execution deadline per task (None disables it).
        _shutdown_timeout: Grace period for stop().
    """

    def __init__(
        self,
        workers: int,
        *,
        logger: LoggerProtocol,
        queue_size: int = POOL_QUEUE_SIZE_DEFAULT,
        submit_timeout: float | None = None,
        task_timeout: float | None = None,
        shutdown_timeout: float = POOL_SHUTDOWN_TIMEOUT_DEFAULT,
        metrics: PoolMetrics | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        """Initialize the pool. Workers are spawned by start().

        Args:
            workers: Number of concurrent workers (>= 1).
            logger: Logger for pool lifecycle and task failures.
            queue_size: Capacity of the task queue (>= 1).
            submit_timeout: Default backpressure deadline for submit().
            task_timeout: Per-task execution deadline in seconds.
            shutdown_timeout: Grace period for draining on stop().
            metrics: Prometheus instruments (optional).
            tracer: OpenTelemetry tracer. Defaults to the package tracer.

        Raises:
            ValueError: If workers or queue_size is below 1.
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if queue_size < 1:
            raise ValueError(f"queue_size must be >= 1, got {queue_size}")

        self._size = workers
        self._queue_size = queue_size
        self._queue: asyncio.Queue[_QueuedTask] = asyncio.Queue(maxsize=queue_size)
        self._submit_timeout = submit_timeout
        self._task_timeout = task_timeout
        self._shutdown_timeout = shutdown_timeout
        self._logger = logger
        self._metrics = metrics
        self._tracer = tracer if tracer is not None else get_tracer()

        self._workers: list[asyncio.Task[None]] = []
        self._closed = False
        self._finished = False
        self._stopped = asyncio.Event()

        self._active = 0
        self._waiting_submitters = 0
        self._submitted = 0
        self._completed = 0
        self._failed = 0
        self._rejected = 0
        self._abandoned = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Spawn the workers. Must be called from a running event loop.

        Calling start() on a running pool does nothing.

        Raises:
            RuntimeError: If the pool was already stopped.
        """
        if self._closed:
            raise RuntimeError("Worker pool was stopped and cannot be restarted")
        if self._workers:
            return

        self._workers = [
            asyncio.create_task(self._worker_loop(), name=f"authz-worker-{index}")
            for index in range(self._size)
        ]
        self._logger.info(
            "worker_pool_started",
            workers=self._size,
            queue_size=self._queue_size,
        )

    async def submit(
        self, task: Task, *, timeout: float | None = None
    ) -> Result[str, WorkerPoolError]:
        """Enqueue a task for background execution.

        Args:
            task: Zero-argument coroutine function or callable.
            timeout: Maximum wait for room in a full queue. Falls back to
                the pool's submit_timeout.

        Returns:
            Success(str): Task id (for log correlation only).
            Failure(PoolSaturatedError): Queue stayed full past the deadline.
            Failure(PoolClosedError): Pool is stopping or stopped.
        """
        if self._closed:
            return self._reject_closed()

        if not self._workers:
            self.start()

        item = _QueuedTask(task_id=uuid4().hex, task=task)
        wait = self._submit_timeout if timeout is None else timeout
        started = time.monotonic()

        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            self._waiting_submitters += 1
            try:
                if wait is None:
                    await self._queue.put(item)
                else:
                    await asyncio.wait_for(self._queue.put(item), timeout=wait)
            except TimeoutError:
                waited = time.monotonic() - started
                self._rejected += 1
                if self._metrics is not None:
                    self._metrics.rejected.labels(reason="saturated").inc()
                self._logger.warning(
                    "worker_pool_saturated",
                    queue_size=self._queue_size,
                    waited_seconds=round(waited, 3),
                )
                return Failure(
                    error=PoolSaturatedError(
                        code=ErrorCode.POOL_SATURATED,
                        message="Worker pool queue is full",
                        queue_size=self._queue_size,
                        waited_seconds=waited,
                    )
                )
            finally:
                self._waiting_submitters -= 1

        # Woken by the final queue purge after the workers are gone.
        if self._finished:
            return self._reject_closed()

        self._submitted += 1
        if self._metrics is not None:
            self._metrics.submitted.inc()
            self._metrics.queue_depth.set(self._queue.qsize())

        return Success(value=item.task_id)

    async def stop(self) -> None:
        """Stop accepting tasks and drain the queue.

        Waits for queued and running tasks for at most shutdown_timeout,
        then cancels the workers. Safe to call more than once; later calls
        wait for the first shutdown to finish.
        """
        if self._closed:
            await self._stopped.wait()
            return

        self._closed = True
        self._logger.info(
            "worker_pool_stopping",
            queue_depth=self._queue.qsize(),
            active_workers=self._active,
        )

        if self._workers:
            try:
                async with asyncio.timeout(self._shutdown_timeout):
                    await self._drain()
            except TimeoutError:
                self._abandoned += self._active
                self._logger.warning(
                    "worker_pool_drain_timed_out",
                    shutdown_timeout=self._shutdown_timeout,
                    abandoned=self._active + self._queue.qsize(),
                )

            for worker in self._workers:
                worker.cancel()
            await asyncio.gather(*self._workers, return_exceptions=True)

        self._finished = True
        self._abandoned += self._purge_queue()
        self._stopped.set()

        self._logger.info(
            "worker_pool_stopped",
            completed=self._completed,
            failed=self._failed,
            abandoned=self._abandoned,
        )

    def stats(self) -> PoolStats:
        return PoolStats(
            workers=self._size,
            queue_size=self._queue_size,
            queue_depth=self._queue.qsize(),
            active_workers=self._active,
            submitted=self._submitted,
            completed=self._completed,
            failed=self._failed,
            rejected=self._rejected,
            abandoned=self._abandoned,
            closed=self._closed,
        )

    def _reject_closed(self) -> Failure[WorkerPoolError]:
        self._rejected += 1
        if self._metrics is not None:
            self._metrics.rejected.labels(reason="closed").inc()
        return Failure(
            error=PoolClosedError(
                code=ErrorCode.POOL_CLOSED,
                message="Worker pool is stopped and accepts no more tasks",
            )
        )

    async def _drain(self) -> None:
        # A submitter woken by the last get() may still be about to put.
        while True:
            await self._queue.join()
            if not self._waiting_submitters and self._queue.empty():
                return
            await asyncio.sleep(0)

    def _purge_queue(self) -> int:
        purged = 0
        while True:
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self._queue.task_done()
            purged += 1
        if self._metrics is not None:
            self._metrics.queue_depth.set(0)
        return purged

    async def _worker_loop(self) -> None:
        while True:
            item = await self._queue.get()
            self._active += 1
            if self._metrics is not None:
                self._metrics.queue_depth.set(self._queue.qsize())
                self._metrics.active_workers.inc()
            try:
                await self._execute(item)
            finally:
                self._active -= 1
                if self._metrics is not None:
                    self._metrics.active_workers.dec()
                self._queue.task_done()

    async def _execute(self, item: _QueuedTask) -> None:
        started = time.perf_counter()
        try:
            with traced(self._tracer, "worker_pool.execute", task_id=item.task_id):
                if self._task_timeout is None:
                    await _invoke(item.task)
                else:
                    async with asyncio.timeout(self._task_timeout):
                        await _invoke(item.task)
        except TimeoutError as e:
            self._failed += 1
            if self._metrics is not None:
                self._metrics.failed.inc()
            self._logger.warning(
                "pool_task_timed_out",
                task_id=item.task_id,
                task_timeout=self._task_timeout,
                error_message=str(e),
            )
        except asyncio.CancelledError as e:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            # Cancelled from inside the task, not by stop().
            self._failed += 1
            if self._metrics is not None:
                self._metrics.failed.inc()
            self._logger.error("pool_task_failed", error=e, task_id=item.task_id)
        except Exception as e:
            self._failed += 1
            if self._metrics is not None:
                self._metrics.failed.inc()
            self._logger.error("pool_task_failed", error=e, task_id=item.task_id)
        else:
            self._completed += 1
            if self._metrics is not None:
                self._metrics.completed.inc()
        finally:
            if self._metrics is not None:
                self._metrics.duration.observe(time.perf_counter() - started)


async def _invoke(task: Task) -> Any:
    if inspect.iscoroutinefunction(task):
        return await task()
    outcome = await asyncio.to_thread(task)
    if inspect.isawaitable(outcome):
        return await outcome
    return outcome
