"""Storage operations produced by reconciliation.

Operations are plain instructions for a storage backend. Executing them is the
job of an ``OperationExecutor`` adapter; the domain only decides which ones are
needed and in which order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar


class OperationKind(StrEnum):
    """Backend operation names, matching the storage backend vocabulary."""

    CREATE_OBJECT = "createObject"
    UPDATE_ONE_OBJECT = "updateOneObject"
    DELETE_ONE_OBJECT = "deleteOneObject"


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateObject:
    """Insert one object; ``fields`` holds the key fields and every field value."""

    collection: str
    fields: Mapping[str, Any]
    kind: ClassVar[OperationKind] = OperationKind.CREATE_OBJECT


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateOneObject:
    """Set exactly one field on the object matched by ``key_filter``."""

    collection: str
    key_filter: Mapping[str, Any]
    field_patch: Mapping[str, Any]
    kind: ClassVar[OperationKind] = OperationKind.UPDATE_ONE_OBJECT

    def __post_init__(self) -> None:
        if len(self.field_patch) != 1:
            raise ValueError("Field patch must contain exactly one field")


@dataclass(frozen=True, slots=True, kw_only=True)
class DeleteOneObject:
    """Delete the object matched by ``key_filter``."""

    collection: str
    key_filter: Mapping[str, Any]
    kind: ClassVar[OperationKind] = OperationKind.DELETE_ONE_OBJECT


type ExecutableOperation = CreateObject | UpdateOneObject | DeleteOneObject
