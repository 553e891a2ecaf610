"""Operation emission stage.

Maps one terminal ``ObjectState`` to the operations that realise it, in this
precedence:
1) deletion (only when neither already deleted upstream nor created in-batch)
2) creation with every field's latest value
3) one single-field update per field not yet synced
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from logsync.domain.operations import CreateObject, DeleteOneObject, UpdateOneObject

if TYPE_CHECKING:
    from collections.abc import Mapping

    from logsync.domain.operations import ExecutableOperation

    from .contracts import ObjectState


class EmitOperations(Protocol):
    """Turn one terminal object state into executable operations."""

    def __call__(
        self,
        state: ObjectState,
        *,
        collection: str,
        key_fields: Mapping[str, Any],
    ) -> list[ExecutableOperation]: ...


def emit_operations(
    state: ObjectState,
    *,
    collection: str,
    key_fields: Mapping[str, Any],
) -> list[ExecutableOperation]:
    """Return zero or more operations for ``state``."""

    if state.should_be_deleted:
        if state.is_deleted or state.should_be_created:
            return []
        return [DeleteOneObject(collection=collection, key_filter=dict(key_fields))]

    if state.should_be_created:
        return [CreateObject(collection=collection, fields={**key_fields, **state.field_values()})]

    return [
        UpdateOneObject(
            collection=collection,
            key_filter=dict(key_fields),
            field_patch={name: field_state.value},
        )
        for name, field_state in state.fields.items()
        if field_state.synced_on is None
    ]
