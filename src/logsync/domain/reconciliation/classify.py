"""Entry classification stage.

Groups a flat batch of log entries by ``(collection, pk)``. Dict insertion
order records first encounter, which later decides emission order; entries for
one object keep their relative input order because the fold is order-sensitive.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logsync.domain.entries import LogEntry

    from .contracts import EntriesByObject


class ClassifyEntries(Protocol):
    """Group entries per object."""

    def __call__(self, entries: Iterable[LogEntry]) -> EntriesByObject: ...


def classify_entries(entries: Iterable[LogEntry]) -> EntriesByObject:
    """Return entries grouped by collection, then by canonical primary key."""

    grouped: dict[str, dict[object, list[LogEntry]]] = {}
    for entry in entries:
        grouped.setdefault(entry.collection, {}).setdefault(entry.pk, []).append(entry)

    return {
        collection: {pk: tuple(object_entries) for pk, object_entries in by_pk.items()}
        for collection, by_pk in grouped.items()
    }
