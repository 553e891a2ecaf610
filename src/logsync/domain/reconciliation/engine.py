"""Orchestrator for the reconciliation subsystem.

The engine composes the classify, fold and emit stages. Each stage returns new
structures, so any of them can be swapped out (or exercised alone) in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .classify import classify_entries
from .contracts import ObjectState, ReconciliationFailed, ReconciliationSucceeded
from .emit import emit_operations
from .fold import fold_object_entries

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logsync.domain.entries import LogEntry
    from logsync.domain.operations import ExecutableOperation
    from logsync.domain.ports.schema import KeyResolver

    from .classify import ClassifyEntries
    from .contracts import ReconciliationResult, StatesByObject
    from .emit import EmitOperations
    from .fold import FoldObjectEntries


log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Run full reconciliation from a log batch to executable operations."""

    key_resolver: KeyResolver
    classify: ClassifyEntries = classify_entries
    fold: FoldObjectEntries = fold_object_entries
    emit: EmitOperations = emit_operations

    def reconcile(self, entries: Iterable[LogEntry]) -> ReconciliationResult:
        """Run all reconciliation stages for ``entries``."""

        entries_by_object = self.classify(entries)
        log.debug(
            "Classified log entries: collections=%s, objects=%s",
            len(entries_by_object),
            sum(len(by_pk) for by_pk in entries_by_object.values()),
        )

        states_by_object: StatesByObject = {}
        for collection, by_pk in entries_by_object.items():
            collection_states = states_by_object.setdefault(collection, {})
            for pk, object_entries in by_pk.items():
                folded = self.fold(object_entries)
                if not isinstance(folded, ObjectState):
                    log.warning("Aborting reconciliation: %s", folded.message)
                    return ReconciliationFailed(anomaly=folded)
                collection_states[pk] = folded

        operations: list[ExecutableOperation] = []
        for collection, collection_states in states_by_object.items():
            for pk, state in collection_states.items():
                key_fields = self.key_resolver.resolve_pk_fields(collection, pk)
                operations.extend(
                    self.emit(state, collection=collection, key_fields=key_fields)
                )

        log.debug("Reconciled log entries into %s operations", len(operations))
        return ReconciliationSucceeded(operations=tuple(operations))


def reconcile_log_entries(
    entries: Iterable[LogEntry],
    *,
    key_resolver: KeyResolver,
) -> ReconciliationResult:
    """Reconcile ``entries`` with the default stages."""

    return ReconciliationEngine(key_resolver=key_resolver).reconcile(entries)
