"""Reconciliation core turning change-log batches into storage operations.

Layered flow:
1) classify entries per ``(collection, pk)`` in first-seen order
2) fold each object's entries into a terminal ``ObjectState``
   (last-writer-wins per field, anomaly detection)
3) emit create/update/delete operations per terminal state

The first anomaly aborts the whole batch; the engine reports it as a
``ReconciliationFailed`` result instead of raising.
"""

from __future__ import annotations

from .anomalies import Anomaly, DoubleCreate, ModificationBeforeCreation, ReconciliationError
from .classify import classify_entries
from .contracts import (
    FieldState,
    ObjectState,
    ReconciliationFailed,
    ReconciliationResult,
    ReconciliationSucceeded,
    ResultStatus,
)
from .emit import emit_operations
from .engine import ReconciliationEngine, reconcile_log_entries
from .fold import fold_entry, fold_object_entries

__all__ = [
    "Anomaly",
    "DoubleCreate",
    "FieldState",
    "ModificationBeforeCreation",
    "ObjectState",
    "ReconciliationEngine",
    "ReconciliationError",
    "ReconciliationFailed",
    "ReconciliationResult",
    "ReconciliationSucceeded",
    "ResultStatus",
    "classify_entries",
    "emit_operations",
    "fold_entry",
    "fold_object_entries",
    "reconcile_log_entries",
]
