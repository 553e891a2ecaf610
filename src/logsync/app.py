"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from logsync.adapters.jsonl import JsonLinesOperationWriter, parse_log_entry_lines
from logsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySyncLogUnitOfWork,
    is_started,
    startup,
)
from logsync.config import get_schema_config, get_sync_config
from logsync.domain.reconciliation import reconcile_log_entries
from logsync.domain.sync import SyncDeviceResult, register_device, share_entries, sync_device

if TYPE_CHECKING:
    from collections.abc import Iterable

    from logsync.domain.entries import Timestamp
    from logsync.domain.ports.execution import OperationExecutor
    from logsync.domain.ports.schema import KeyResolver
    from logsync.domain.ports.unit_of_work import SyncLogUnitOfWork
    from logsync.domain.reconciliation import ReconciliationResult

UnitOfWorkFactory = Callable[[], "SyncLogUnitOfWork"]


log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def reconcile_lines(
    lines: Iterable[str],
    *,
    key_resolver: KeyResolver | None = None,
) -> ReconciliationResult:
    """Reconcile JSON lines of log entries using the configured schema."""

    resolver = key_resolver or get_schema_config().build_registry()
    entries = list(parse_log_entry_lines(lines))
    log.info("Reconciling %s log entries", len(entries))
    return reconcile_log_entries(entries, key_resolver=resolver)


def register_sync_device(
    *,
    user_id: str,
    shared_until: Timestamp | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> str:
    """Register a device in the shared sync log."""

    if unit_of_work_factory is None:
        _ensure_started()
    return register_device(
        user_id=user_id,
        shared_until=(
            shared_until if shared_until is not None else get_sync_config().initial_shared_until
        ),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemySyncLogUnitOfWork,
    )


def push_entry_lines(
    lines: Iterable[str],
    *,
    device_id: str,
    user_id: str,
    shared_on: Timestamp,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Append JSON lines of log entries to the shared sync log."""

    if unit_of_work_factory is None:
        _ensure_started()
    return share_entries(
        parse_log_entry_lines(lines),
        device_id=device_id,
        user_id=user_id,
        shared_on=shared_on,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemySyncLogUnitOfWork,
    )


def pull_device_operations(
    *,
    device_id: str,
    local_lines: Iterable[str] = (),
    executor: OperationExecutor | None = None,
    key_resolver: KeyResolver | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncDeviceResult:
    """Run one sync round for ``device_id`` against the configured shared log."""

    if unit_of_work_factory is None:
        _ensure_started()
    return sync_device(
        device_id,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemySyncLogUnitOfWork,
        key_resolver=key_resolver or get_schema_config().build_registry(),
        executor=executor or JsonLinesOperationWriter(),
        local_entries=list(parse_log_entry_lines(local_lines)),
    )
