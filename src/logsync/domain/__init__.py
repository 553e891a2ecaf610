"""Domain layer: log entries, reconciliation and sync rounds."""

from __future__ import annotations

from .entries import (
    CreationEntry,
    DeletionEntry,
    EntryOperation,
    LogEntry,
    ModificationEntry,
    PrimaryKey,
    Timestamp,
    canonical_pk,
)
from .operations import (
    CreateObject,
    DeleteOneObject,
    ExecutableOperation,
    OperationKind,
    UpdateOneObject,
)

__all__ = [
    "CreateObject",
    "CreationEntry",
    "DeleteOneObject",
    "DeletionEntry",
    "EntryOperation",
    "ExecutableOperation",
    "LogEntry",
    "ModificationEntry",
    "OperationKind",
    "PrimaryKey",
    "Timestamp",
    "UpdateOneObject",
    "canonical_pk",
]
