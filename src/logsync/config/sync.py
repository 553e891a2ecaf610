"""Synchronization defaults for sync rounds."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_SHARED_UNTIL = 0


@dataclass(frozen=True, slots=True)
class SyncConfig:
    initial_shared_until: int = DEFAULT_SHARED_UNTIL


def get_sync_config() -> SyncConfig:
    raw = os.getenv("LOGSYNC_INITIAL_SHARED_UNTIL")
    if raw is None or not raw.strip():
        return SyncConfig()
    try:
        return SyncConfig(initial_shared_until=int(raw))
    except ValueError as exc:
        raise ConfigurationError(f"Invalid LOGSYNC_INITIAL_SHARED_UNTIL: {raw!r}") from exc
