"""Primary-key schema configuration loaded from a TOML file.

Example::

    [collections.lists]
    pk = "id"

    [collections.listEntry]
    pk = ["listId", "position"]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, cast

from logsync.domain.schema_registry import StaticSchemaRegistry

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_PK_FIELD: Final[str] = "id"


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    pk_fields: dict[str, str | tuple[str, ...]] = field(
        default_factory=dict["str", "str | tuple[str, ...]"]
    )
    default_pk_field: str | None = DEFAULT_PK_FIELD

    def build_registry(self) -> StaticSchemaRegistry:
        return StaticSchemaRegistry(
            pk_fields=dict(self.pk_fields),
            default_pk_field=self.default_pk_field,
        )


def _parse_pk_definition(collection: str, raw: object) -> str | tuple[str, ...]:
    if isinstance(raw, str) and raw:
        return raw
    if isinstance(raw, list) and raw and all(isinstance(item, str) for item in raw):
        return tuple(cast("list[str]", raw))
    raise ConfigurationError(
        f"Invalid pk definition for collection '{collection}': expected a field name "
        "or a non-empty list of field names"
    )


def load_schema_file(path: Path, *, default_pk_field: str | None = DEFAULT_PK_FIELD) -> SchemaConfig:
    """Read collection key definitions from ``path``."""

    try:
        with path.open("rb") as schema_file:
            document = tomllib.load(schema_file)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Schema file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid schema file {path}: {exc}") from exc

    collections = cast("dict[str, Any]", document.get("collections", {}))
    pk_fields: dict[str, str | tuple[str, ...]] = {}
    for collection, section in collections.items():
        if not isinstance(section, dict):
            raise ConfigurationError(f"Collection '{collection}' must be a table")
        pk_fields[collection] = _parse_pk_definition(
            collection, cast("dict[str, object]", section).get("pk")
        )
    return SchemaConfig(pk_fields=pk_fields, default_pk_field=default_pk_field)


def get_schema_config() -> SchemaConfig:
    default_pk_field = optional_env_var("LOGSYNC_DEFAULT_PK_FIELD") or DEFAULT_PK_FIELD
    schema_path = optional_env_var("LOGSYNC_SCHEMA_FILE")
    if schema_path is None:
        return SchemaConfig(default_pk_field=default_pk_field)
    return load_schema_file(Path(schema_path), default_pk_field=default_pk_field)
