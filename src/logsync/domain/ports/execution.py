"""Port for handing reconciled operations to a storage backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logsync.domain.operations import ExecutableOperation


class OperationExecutor(Protocol):
    """Execute operations in the given order."""

    def __call__(self, operations: Sequence[ExecutableOperation]) -> None: ...
