"""SQLAlchemy adapter package for logsync."""

from __future__ import annotations

from .mappings import create_all_tables, device_info_table, log_entry_table, metadata
from .sync_log import SqlAlchemySharedSyncLog
from .unit_of_work import (
    SqlAlchemySyncLogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemySharedSyncLog",
    "SqlAlchemySyncLogUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "device_info_table",
    "is_started",
    "log_entry_table",
    "metadata",
    "shutdown",
    "startup",
]
