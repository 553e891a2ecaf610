"""Static schema registry resolving primary keys into named key fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from logsync.domain.entries import PrimaryKey

type PkFields = str | tuple[str, ...]


class UnknownCollectionError(LookupError):
    """Raised when no key definition exists for a collection."""

    def __init__(self, collection: str) -> None:
        self.collection = collection
        super().__init__(f"No primary key definition for collection '{collection}'")


class KeyShapeError(ValueError):
    """Raised when a compound key does not match its collection's key fields."""


@dataclass(frozen=True, slots=True)
class StaticSchemaRegistry:
    """Key definitions per collection.

    A collection keyed by one field receives the whole pk value in that field,
    even when the value is compound. A collection keyed by several fields
    receives the compound pk's components positionally.
    """

    pk_fields: Mapping[str, PkFields] = field(default_factory=dict["str", "PkFields"])
    default_pk_field: str | None = None

    def key_fields_for(self, collection: str) -> PkFields:
        definition = self.pk_fields.get(collection, self.default_pk_field)
        if definition is None:
            raise UnknownCollectionError(collection)
        return definition

    def resolve_pk_fields(self, collection: str, pk: PrimaryKey) -> dict[str, Any]:
        definition = self.key_fields_for(collection)
        if isinstance(definition, str):
            return {definition: pk}
        if len(definition) == 1:
            return {definition[0]: pk}
        if not isinstance(pk, tuple) or len(pk) != len(definition):
            raise KeyShapeError(
                f"Primary key {pk!r} does not match key fields {definition!r} "
                f"of collection '{collection}'"
            )
        return dict(zip(definition, pk, strict=True))
