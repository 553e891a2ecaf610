"""Operation executor writing operations as JSON lines."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from .translator import operation_to_payload

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logsync.domain.operations import ExecutableOperation


class JsonLinesOperationWriter:
    """Write one ``{"operation", "collection", "args"}`` object per line."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def __call__(self, operations: Sequence[ExecutableOperation]) -> None:
        for operation in operations:
            self.stream.write(operation_to_payload(operation).model_dump_json())
            self.stream.write("\n")
        self.stream.flush()


if TYPE_CHECKING:
    from logsync.domain.ports.execution import OperationExecutor

    _executor_check: OperationExecutor = JsonLinesOperationWriter()
