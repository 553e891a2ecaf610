"""Domain port definitions for adapters."""

from __future__ import annotations

from .execution import OperationExecutor
from .schema import KeyResolver
from .sync_log import SharedSyncLog, SharedSyncLogEntry, UnknownDeviceError
from .unit_of_work import (
    RepositoryCollection,
    SyncLogRepositories,
    SyncLogUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "KeyResolver",
    "OperationExecutor",
    "RepositoryCollection",
    "SharedSyncLog",
    "SharedSyncLogEntry",
    "SyncLogRepositories",
    "SyncLogUnitOfWork",
    "UnitOfWork",
    "UnknownDeviceError",
]
