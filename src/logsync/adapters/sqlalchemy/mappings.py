"""SQLAlchemy table metadata for the shared sync log."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import JSON, BigInteger, Column, ForeignKey, Index, Integer, MetaData, String, Table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

device_info_table = Table(
    "shared_sync_log_device_info",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String, nullable=False),
    Column("shared_until", BigInteger, nullable=False),
)

log_entry_table = Table(
    "shared_sync_log_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String, nullable=False),
    Column(
        "device_id",
        String(36),
        ForeignKey("shared_sync_log_device_info.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("collection", String, nullable=False),
    Column("created_on", BigInteger, nullable=False),
    Column("shared_on", BigInteger, nullable=False),
    Column("data", JSON, nullable=False),
    Index("ix_shared_sync_log_entry_shared_on", "shared_on"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the shared sync log."""

    log.info("Creating shared sync log tables")
    metadata.create_all(engine)
