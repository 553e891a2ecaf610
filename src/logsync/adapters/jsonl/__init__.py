"""Public interface for the JSON lines adapter."""

from __future__ import annotations

from .schema import (
    LOG_ENTRY_ADAPTER,
    CreationEntryPayload,
    DeletionEntryPayload,
    LogEntryPayload,
    LogEntryPayloadInput,
    ModificationEntryPayload,
    OperationPayload,
)
from .translator import (
    log_entry_to_payload,
    operation_to_payload,
    parse_log_entry,
    parse_log_entry_lines,
)
from .writer import JsonLinesOperationWriter

__all__ = [
    "LOG_ENTRY_ADAPTER",
    "CreationEntryPayload",
    "DeletionEntryPayload",
    "JsonLinesOperationWriter",
    "LogEntryPayload",
    "LogEntryPayloadInput",
    "ModificationEntryPayload",
    "OperationPayload",
    "log_entry_to_payload",
    "operation_to_payload",
    "parse_log_entry",
    "parse_log_entry_lines",
]
