"""Data-integrity anomalies detected while folding log entries.

Both anomalies are fatal for the whole batch. They point at a primary-key
collision between devices or at corrupted log data, and nothing at this layer
can repair either by guessing intent.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logsync.domain.entries import PrimaryKey


def _pk_as_json(pk: PrimaryKey) -> str:
    return json.dumps(pk, default=str)


@dataclass(frozen=True, slots=True)
class DoubleCreate:
    """Two creation entries target the same object within one batch."""

    collection: str
    pk: PrimaryKey

    @property
    def message(self) -> str:
        return (
            f"Detected double create in collection '{self.collection}', "
            f"pk '{_pk_as_json(self.pk)}'"
        )


@dataclass(frozen=True, slots=True)
class ModificationBeforeCreation:
    """An entry predates the recorded creation time of its object."""

    collection: str
    pk: PrimaryKey

    @property
    def message(self) -> str:
        return (
            f"Detected modification to collection '{self.collection}', "
            f"pk '{_pk_as_json(self.pk)}' before it was created (likely pk collision)"
        )


type Anomaly = DoubleCreate | ModificationBeforeCreation


class ReconciliationError(RuntimeError):
    """Raised when a caller unwraps a failed reconciliation result."""

    def __init__(self, anomaly: Anomaly) -> None:
        self.anomaly = anomaly
        super().__init__(anomaly.message)
