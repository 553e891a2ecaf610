"""Client change-log entries consumed by reconciliation.

Every entry addresses one object through ``(collection, pk)`` and carries the
logical time it was recorded (``created_on``). ``synced_on`` is set once the
entry is known to the shared log; ``None`` means it is still purely local.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, cast

type Timestamp = int
type PrimaryKey = Hashable


class EntryOperation(StrEnum):
    """Kind of change recorded by a log entry."""

    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"


def canonical_pk(pk: object) -> PrimaryKey:
    """Return ``pk`` with every list replaced by a tuple.

    Compound keys arrive as lists from JSON payloads. Tuples compare and hash
    element-wise, so two keys group together iff they are structurally equal.
    """

    if isinstance(pk, list | tuple):
        return tuple(canonical_pk(part) for part in cast("list[object]", pk))
    if not isinstance(pk, Hashable):
        raise TypeError(f"Unsupported primary key type: {type(pk).__name__}")
    return pk


@dataclass(frozen=True, slots=True, kw_only=True)
class CreationEntry:
    """An object was created with the given field values."""

    collection: str
    pk: PrimaryKey
    value: Mapping[str, Any]
    created_on: Timestamp
    synced_on: Timestamp | None = None
    operation: ClassVar[EntryOperation] = EntryOperation.CREATE

    def __post_init__(self) -> None:
        object.__setattr__(self, "pk", canonical_pk(self.pk))
        object.__setattr__(self, "value", dict(self.value))


@dataclass(frozen=True, slots=True, kw_only=True)
class ModificationEntry:
    """A single field of an object was set to ``value``."""

    collection: str
    pk: PrimaryKey
    field: str
    value: Any
    created_on: Timestamp
    synced_on: Timestamp | None = None
    operation: ClassVar[EntryOperation] = EntryOperation.MODIFY

    def __post_init__(self) -> None:
        object.__setattr__(self, "pk", canonical_pk(self.pk))


@dataclass(frozen=True, slots=True, kw_only=True)
class DeletionEntry:
    """An object was deleted."""

    collection: str
    pk: PrimaryKey
    created_on: Timestamp
    synced_on: Timestamp | None = None
    operation: ClassVar[EntryOperation] = EntryOperation.DELETE

    def __post_init__(self) -> None:
        object.__setattr__(self, "pk", canonical_pk(self.pk))


type LogEntry = CreationEntry | ModificationEntry | DeletionEntry
