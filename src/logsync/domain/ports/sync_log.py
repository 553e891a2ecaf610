"""Ports for the shared (cross-device) sync log."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logsync.domain.entries import LogEntry, Timestamp


class UnknownDeviceError(LookupError):
    """Raised when a device id has no registration in the shared log."""

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__(f"Unknown sync log device: {device_id}")


@dataclass(frozen=True, slots=True, kw_only=True)
class SharedSyncLogEntry:
    """A client log entry as stored in the shared log.

    ``shared_on`` is the shared log's own timestamp and drives per-device
    high-water marks. ``device_id``/``user_id`` are filled in on write.
    """

    entry: LogEntry
    shared_on: Timestamp
    device_id: str | None = None
    user_id: str | None = None

    @property
    def created_on(self) -> Timestamp:
        return self.entry.created_on


@runtime_checkable
class SharedSyncLog(Protocol):
    """Append/read service keyed by device with a per-device high-water mark."""

    def create_device_id(self, *, user_id: str, shared_until: Timestamp) -> str: ...

    def write_entries(
        self,
        entries: Sequence[SharedSyncLogEntry],
        *,
        user_id: str,
        device_id: str,
    ) -> None: ...

    def get_unsynced_entries(self, *, device_id: str) -> list[SharedSyncLogEntry]: ...

    def update_shared_until(self, *, device_id: str, until: Timestamp) -> None: ...
