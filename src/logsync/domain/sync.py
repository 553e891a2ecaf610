"""Application services for one device's sync round."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from logsync.domain.ports.sync_log import SharedSyncLogEntry
from logsync.domain.reconciliation import reconcile_log_entries

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from logsync.domain.entries import LogEntry, Timestamp
    from logsync.domain.operations import ExecutableOperation
    from logsync.domain.ports.execution import OperationExecutor
    from logsync.domain.ports.schema import KeyResolver
    from logsync.domain.ports.unit_of_work import SyncLogUnitOfWork


log = getLogger(__name__)


@dataclass(slots=True)
class SyncDeviceResult:
    """Outcome of one sync round."""

    fetched: int
    operations: tuple[ExecutableOperation, ...]
    shared_until: Timestamp | None


def sync_device(
    device_id: str,
    *,
    unit_of_work_factory: Callable[[], SyncLogUnitOfWork],
    key_resolver: KeyResolver,
    executor: OperationExecutor,
    local_entries: Iterable[LogEntry] = (),
) -> SyncDeviceResult:
    """Reconcile unseen shared entries (plus ``local_entries``) and execute them.

    The high-water mark only moves after the operations were handed to
    ``executor``. A reconciliation anomaly raises ``ReconciliationError`` and
    leaves the mark untouched.
    """

    with unit_of_work_factory() as uow:
        shared_log = uow.repositories.shared_log
        shared_entries = shared_log.get_unsynced_entries(device_id=device_id)
        entries = [shared.entry for shared in shared_entries]
        entries.extend(local_entries)
        log.info(
            "Reconciling %s entries for device %s (%s from shared log)",
            len(entries),
            device_id,
            len(shared_entries),
        )

        operations = reconcile_log_entries(entries, key_resolver=key_resolver).unwrap()
        executor(operations)

        shared_until = max((shared.shared_on for shared in shared_entries), default=None)
        if shared_until is not None:
            shared_log.update_shared_until(device_id=device_id, until=shared_until)
        uow.commit()

    log.info(
        "Finished sync for device %s: fetched=%s, operations=%s, shared_until=%s",
        device_id,
        len(shared_entries),
        len(operations),
        shared_until,
    )
    return SyncDeviceResult(
        fetched=len(shared_entries),
        operations=operations,
        shared_until=shared_until,
    )


def share_entries(
    entries: Iterable[LogEntry],
    *,
    device_id: str,
    user_id: str,
    shared_on: Timestamp,
    unit_of_work_factory: Callable[[], SyncLogUnitOfWork],
) -> int:
    """Append local entries to the shared log stamped with ``shared_on``."""

    shared = [SharedSyncLogEntry(entry=entry, shared_on=shared_on) for entry in entries]
    if not shared:
        return 0
    with unit_of_work_factory() as uow:
        uow.repositories.shared_log.write_entries(shared, user_id=user_id, device_id=device_id)
        uow.commit()
    log.info("Shared %s entries from device %s", len(shared), device_id)
    return len(shared)


def register_device(
    *,
    user_id: str,
    shared_until: Timestamp,
    unit_of_work_factory: Callable[[], SyncLogUnitOfWork],
) -> str:
    """Register a new device in the shared log and return its id."""

    with unit_of_work_factory() as uow:
        device_id = uow.repositories.shared_log.create_device_id(
            user_id=user_id,
            shared_until=shared_until,
        )
        uow.commit()
    log.info("Registered device %s for user %s", device_id, user_id)
    return device_id
