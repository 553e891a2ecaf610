"""Per-object fold stage.

Responsibilities of this stage:
- fold every entry addressed to one object into a terminal ``ObjectState``
- resolve field values last-writer-wins on ``created_on`` (ties keep the
  first value seen)
- detect double creation and modification-before-creation anomalies

Entries are applied strictly in input order. Timestamps decide which field
value wins, never the processing order. Each step returns a new state with its
own ``fields`` dict; nothing is mutated in place.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Protocol

from logsync.domain.entries import CreationEntry, DeletionEntry, ModificationEntry

from .anomalies import DoubleCreate, ModificationBeforeCreation
from .contracts import FieldState, ObjectState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logsync.domain.entries import LogEntry

    from .anomalies import Anomaly


class FoldObjectEntries(Protocol):
    """Fold the ordered entries of one object into its terminal state."""

    def __call__(self, entries: Iterable[LogEntry]) -> ObjectState | Anomaly: ...


def fold_object_entries(entries: Iterable[LogEntry]) -> ObjectState | Anomaly:
    """Fold ``entries`` in order, stopping at the first anomaly.

    Callers must pass at least one entry; an object without entries has no
    state at all.
    """

    state: ObjectState | None = None
    for entry in entries:
        folded = fold_entry(state, entry)
        if not isinstance(folded, ObjectState):
            return folded
        state = folded
    if state is None:
        raise ValueError("Cannot fold an object without log entries")
    return state


def fold_entry(state: ObjectState | None, entry: LogEntry) -> ObjectState | Anomaly:
    """Apply a single entry to ``state`` (``None`` before the first entry)."""

    if isinstance(entry, CreationEntry):
        return _fold_creation(state, entry)
    if isinstance(entry, DeletionEntry):
        return _fold_deletion(state, entry)
    if isinstance(entry, ModificationEntry):
        return _fold_modification(state, entry)
    raise TypeError(f"Unsupported log entry: {type(entry).__name__}")


def _fold_creation(state: ObjectState | None, entry: CreationEntry) -> ObjectState | Anomaly:
    if state is None:
        return ObjectState(
            should_be_created=True,
            created_on=entry.created_on,
            fields={
                name: FieldState(
                    value=value,
                    created_on=entry.created_on,
                    synced_on=entry.synced_on,
                )
                for name, value in entry.value.items()
            },
        )

    if state.should_be_created:
        return DoubleCreate(entry.collection, entry.pk)

    # Earlier entries (modifications, deletions) were folded before the creation.
    fields = dict(state.fields)
    for name, value in entry.value.items():
        existing = fields.get(name)
        if existing is None:
            fields[name] = FieldState(
                value=value,
                created_on=entry.created_on,
                synced_on=entry.synced_on,
            )
        elif existing.created_on < entry.created_on:
            return ModificationBeforeCreation(entry.collection, entry.pk)

    return replace(state, should_be_created=True, created_on=entry.created_on, fields=fields)


def _fold_deletion(state: ObjectState | None, entry: DeletionEntry) -> ObjectState:
    is_deleted = entry.synced_on is not None
    if state is None:
        return ObjectState(should_be_created=False, is_deleted=is_deleted, should_be_deleted=True)
    # Last folded deletion wins regardless of its timestamp.
    return replace(state, is_deleted=is_deleted, should_be_deleted=True, fields={})


def _fold_modification(
    state: ObjectState | None,
    entry: ModificationEntry,
) -> ObjectState | Anomaly:
    incoming = FieldState(value=entry.value, created_on=entry.created_on, synced_on=entry.synced_on)
    if state is None:
        return ObjectState(
            should_be_created=False,
            is_deleted=entry.synced_on is not None,
            should_be_deleted=False,
            fields={entry.field: incoming},
        )

    if (
        state.should_be_created
        and state.created_on is not None
        and state.created_on > entry.created_on
    ):
        return ModificationBeforeCreation(entry.collection, entry.pk)

    existing = state.fields.get(entry.field)
    if existing is not None and entry.created_on <= existing.created_on:
        return state
    return replace(state, fields={**state.fields, entry.field: incoming})
