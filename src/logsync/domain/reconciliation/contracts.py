"""Shared reconciliation contract components.

This module intentionally holds only:
- object-key and ``*ByObject`` mapping aliases
- the per-object accumulator records built by the fold
- the result union returned by the engine
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Literal

from .anomalies import ReconciliationError

if TYPE_CHECKING:
    from logsync.domain.entries import LogEntry, PrimaryKey, Timestamp
    from logsync.domain.operations import ExecutableOperation

    from .anomalies import Anomaly


type ObjectKey = tuple[str, PrimaryKey]
type EntriesByObject = dict[str, dict[PrimaryKey, tuple[LogEntry, ...]]]
type StatesByObject = dict[str, dict[PrimaryKey, ObjectState]]


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldState:
    """Latest known value of one field and the entry timestamps it came from."""

    value: Any
    created_on: Timestamp
    synced_on: Timestamp | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ObjectState:
    """Terminal (or intermediate) state of one object during a fold."""

    should_be_created: bool = False
    created_on: Timestamp | None = None
    is_deleted: bool = False
    should_be_deleted: bool = False
    fields: Mapping[str, FieldState] = field(default_factory=dict["str", "FieldState"])

    def field_values(self) -> dict[str, Any]:
        return {name: state.value for name, state in self.fields.items()}


class ResultStatus(StrEnum):
    """Outcome of one reconciliation call."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationSucceeded:
    """Every object folded cleanly; ``operations`` realise the final state."""

    operations: tuple[ExecutableOperation, ...]
    status: Literal[ResultStatus.SUCCEEDED] = ResultStatus.SUCCEEDED

    def unwrap(self) -> tuple[ExecutableOperation, ...]:
        return self.operations


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationFailed:
    """The batch was rejected on the first anomaly encountered."""

    anomaly: Anomaly
    status: Literal[ResultStatus.FAILED] = ResultStatus.FAILED

    def unwrap(self) -> tuple[ExecutableOperation, ...]:
        raise ReconciliationError(self.anomaly)


type ReconciliationResult = ReconciliationSucceeded | ReconciliationFailed
