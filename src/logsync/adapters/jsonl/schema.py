"""Pydantic models describing the JSON wire form of log entries and operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class LogSyncBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class _EntryPayload(LogSyncBaseModel):
    collection: str
    pk: Any
    created_on: int = Field(alias="createdOn")
    # Older clients call the confirmation timestamp ``sharedOn``.
    synced_on: int | None = Field(
        default=None,
        alias="syncedOn",
        validation_alias=AliasChoices("syncedOn", "sharedOn"),
    )

    @field_validator("pk")
    @classmethod
    def _require_pk(cls, value: object) -> object:
        if value is None:
            raise ValueError("pk must not be null")
        return value


class CreationEntryPayload(_EntryPayload):
    operation: Literal["create"]
    value: dict[str, Any]


class ModificationEntryPayload(_EntryPayload):
    operation: Literal["modify"]
    field: str
    value: Any = None


class DeletionEntryPayload(_EntryPayload):
    operation: Literal["delete"]


LogEntryPayload = Annotated[
    CreationEntryPayload | ModificationEntryPayload | DeletionEntryPayload,
    Field(discriminator="operation"),
]

LOG_ENTRY_ADAPTER: TypeAdapter[LogEntryPayload] = TypeAdapter(LogEntryPayload)


class OperationPayload(LogSyncBaseModel):
    """Backend operation as ``{"operation", "collection", "args"}``."""

    operation: Literal["createObject", "updateOneObject", "deleteOneObject"]
    collection: str
    args: list[dict[str, Any]]


LogEntryPayloadInput = LogEntryPayload | Mapping[str, object]
