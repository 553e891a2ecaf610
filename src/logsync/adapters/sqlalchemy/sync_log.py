"""Shared sync log backed by a SQLAlchemy session."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import insert, select, update

from logsync.adapters.jsonl import log_entry_to_payload, parse_log_entry
from logsync.adapters.sqlalchemy.mappings import device_info_table, log_entry_table
from logsync.domain.ports.sync_log import SharedSyncLogEntry, UnknownDeviceError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Session

    from logsync.domain.entries import Timestamp


class SqlAlchemySharedSyncLog:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create_device_id(self, *, user_id: str, shared_until: Timestamp) -> str:
        device_id = str(uuid.uuid4())
        self.session.execute(
            insert(device_info_table).values(
                id=device_id,
                user_id=user_id,
                shared_until=shared_until,
            )
        )
        return device_id

    def write_entries(
        self,
        entries: Sequence[SharedSyncLogEntry],
        *,
        user_id: str,
        device_id: str,
    ) -> None:
        self._shared_until(device_id)
        if not entries:
            return
        self.session.execute(
            insert(log_entry_table),
            [
                {
                    "user_id": user_id,
                    "device_id": device_id,
                    "collection": shared.entry.collection,
                    "created_on": shared.created_on,
                    "shared_on": shared.shared_on,
                    "data": log_entry_to_payload(shared.entry),
                }
                for shared in entries
            ],
        )

    def get_unsynced_entries(self, *, device_id: str) -> list[SharedSyncLogEntry]:
        shared_until = self._shared_until(device_id)
        stmt = (
            select(
                log_entry_table.c.user_id,
                log_entry_table.c.device_id,
                log_entry_table.c.shared_on,
                log_entry_table.c.data,
            )
            .where(log_entry_table.c.shared_on > shared_until)
            .order_by(log_entry_table.c.shared_on.asc(), log_entry_table.c.id.asc())
        )
        return [
            SharedSyncLogEntry(
                entry=parse_log_entry(cast("dict[str, Any]", row.data)),
                shared_on=row.shared_on,
                device_id=row.device_id,
                user_id=row.user_id,
            )
            for row in self.session.execute(stmt)
        ]

    def update_shared_until(self, *, device_id: str, until: Timestamp) -> None:
        result = self.session.execute(
            update(device_info_table)
            .where(device_info_table.c.id == device_id)
            .values(shared_until=until)
        )
        if result.rowcount == 0:
            raise UnknownDeviceError(device_id)

    def _shared_until(self, device_id: str) -> Timestamp:
        stmt = select(device_info_table.c.shared_until).where(device_info_table.c.id == device_id)
        shared_until = self.session.execute(stmt).scalar_one_or_none()
        if shared_until is None:
            raise UnknownDeviceError(device_id)
        return shared_until


if TYPE_CHECKING:
    from logsync.domain.ports.sync_log import SharedSyncLog

    def _sync_log_check(session: Session) -> SharedSyncLog:
        return SqlAlchemySharedSyncLog(session)
