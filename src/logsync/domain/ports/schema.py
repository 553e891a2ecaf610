"""Port for resolving primary-key values into named key fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from logsync.domain.entries import PrimaryKey


@runtime_checkable
class KeyResolver(Protocol):
    """Map ``(collection, pk)`` to the key fields a storage backend addresses."""

    def resolve_pk_fields(self, collection: str, pk: PrimaryKey) -> dict[str, Any]: ...
