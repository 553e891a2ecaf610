"""Translate between JSON wire payloads and domain entries/operations."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Any

from logsync.domain.entries import CreationEntry, DeletionEntry, ModificationEntry
from logsync.domain.operations import CreateObject, DeleteOneObject, UpdateOneObject

from .schema import (
    LOG_ENTRY_ADAPTER,
    CreationEntryPayload,
    DeletionEntryPayload,
    ModificationEntryPayload,
    OperationPayload,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from logsync.domain.entries import LogEntry
    from logsync.domain.operations import ExecutableOperation

    from .schema import LogEntryPayload, LogEntryPayloadInput


log = getLogger(__name__)


def _ensure_entry_payload(payload: LogEntryPayloadInput) -> LogEntryPayload:
    if isinstance(payload, CreationEntryPayload | ModificationEntryPayload | DeletionEntryPayload):
        return payload
    return LOG_ENTRY_ADAPTER.validate_python(payload)


def parse_log_entry(payload: LogEntryPayloadInput) -> LogEntry:
    """Build a domain log entry from a wire payload."""

    validated = _ensure_entry_payload(payload)
    if isinstance(validated, CreationEntryPayload):
        return CreationEntry(
            collection=validated.collection,
            pk=validated.pk,
            value=validated.value,
            created_on=validated.created_on,
            synced_on=validated.synced_on,
        )
    if isinstance(validated, ModificationEntryPayload):
        return ModificationEntry(
            collection=validated.collection,
            pk=validated.pk,
            field=validated.field,
            value=validated.value,
            created_on=validated.created_on,
            synced_on=validated.synced_on,
        )
    return DeletionEntry(
        collection=validated.collection,
        pk=validated.pk,
        created_on=validated.created_on,
        synced_on=validated.synced_on,
    )


def parse_log_entry_lines(lines: Iterable[str]) -> Iterator[LogEntry]:
    """Parse JSON lines into entries, skipping blank lines."""

    for line_number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped:
            continue
        try:
            yield parse_log_entry(json.loads(stripped))
        except ValueError:
            log.exception("Invalid log entry on line %s", line_number)
            raise


def _pk_to_json(pk: object) -> object:
    if isinstance(pk, tuple):
        return [_pk_to_json(part) for part in pk]
    return pk


def log_entry_to_payload(entry: LogEntry) -> dict[str, Any]:
    """Return the wire form of ``entry``."""

    payload: dict[str, Any] = {
        "operation": entry.operation.value,
        "collection": entry.collection,
        "pk": _pk_to_json(entry.pk),
        "createdOn": entry.created_on,
        "syncedOn": entry.synced_on,
    }
    if isinstance(entry, CreationEntry):
        payload["value"] = dict(entry.value)
    elif isinstance(entry, ModificationEntry):
        payload["field"] = entry.field
        payload["value"] = entry.value
    return payload


def _jsonable(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _pk_to_json(value) for key, value in mapping.items()}


def operation_to_payload(operation: ExecutableOperation) -> OperationPayload:
    """Return the backend wire form of ``operation``."""

    if isinstance(operation, CreateObject):
        args = [_jsonable(operation.fields)]
    elif isinstance(operation, UpdateOneObject):
        args = [_jsonable(operation.key_filter), _jsonable(operation.field_patch)]
    elif isinstance(operation, DeleteOneObject):
        args = [_jsonable(operation.key_filter)]
    else:
        raise TypeError(f"Unsupported operation: {type(operation).__name__}")
    return OperationPayload(
        operation=operation.kind.value,
        collection=operation.collection,
        args=args,
    )
