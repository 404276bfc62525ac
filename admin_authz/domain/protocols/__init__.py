"""Domain protocols (ports)."""

from admin_authz.domain.protocols.authorization_store_protocol import (
    AuthorizationStoreProtocol,
)
from admin_authz.domain.protocols.entitlements_protocol import EntitlementsProtocol
from admin_authz.domain.protocols.logger_protocol import LoggerProtocol
from admin_authz.domain.protocols.worker_pool_protocol import Task, WorkerPoolProtocol

__all__ = [
    "AuthorizationStoreProtocol",
    "EntitlementsProtocol",
    "LoggerProtocol",
    "Task",
    "WorkerPoolProtocol",
]
