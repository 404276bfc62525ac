"""LoggerProtocol definition for structured logging.

Every component (pool, store clients, authorizer) receives a logger by
constructor injection and only depends on this protocol.

Log Levels:
    - DEBUG: Per-task and per-request diagnostics
    - INFO: Lifecycle events (pool started, model validated)
    - WARNING: Degraded behaviour (queue saturated, shutdown grace exceeded)
    - ERROR: A background entitlement write failed
    - CRITICAL: Startup aborted (model mismatch)

Security:
    - NEVER log the store API token

Usage:
    logger.info("worker_pool_started", workers=4)
    task_logger = logger.bind(resource_type="client", resource_id="abc")
    task_logger.error("entitlement_write_failed", reason=str(error))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls are structured: an event-style message plus
    key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: BaseException | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event-style message.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: BaseException | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
