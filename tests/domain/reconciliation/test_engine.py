from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from logsync.domain.operations import CreateObject, DeleteOneObject, UpdateOneObject
from logsync.domain.reconciliation import (
    DoubleCreate,
    ModificationBeforeCreation,
    ObjectState,
    ReconciliationEngine,
    ReconciliationError,
    ReconciliationFailed,
    ReconciliationSucceeded,
    ResultStatus,
    reconcile_log_entries,
)
from tests.helpers.entries import create, delete, modify, pk_registry

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from typing import Any

    from logsync.domain.entries import LogEntry
    from logsync.domain.operations import ExecutableOperation


def _reconcile(entries: list[LogEntry]) -> tuple[ExecutableOperation, ...]:
    return reconcile_log_entries(entries, key_resolver=pk_registry()).unwrap()


def test_newest_write_wins_for_two_entries_on_one_field() -> None:
    operations = _reconcile(
        [
            modify(2, "title", "second"),
            modify(1, "title", "first"),
        ]
    )

    assert operations == (
        UpdateOneObject(
            collection="lists", key_filter={"pk": "list-one"}, field_patch={"title": "second"}
        ),
    )


def test_newest_write_wins_for_more_than_two_entries_on_one_field() -> None:
    operations = _reconcile(
        [
            modify(2, "title", "second"),
            modify(3, "title", "third"),
            modify(1, "title", "first"),
        ]
    )

    assert operations == (
        UpdateOneObject(
            collection="lists", key_filter={"pk": "list-one"}, field_patch={"title": "third"}
        ),
    )


def test_first_seen_write_wins_on_timestamp_tie() -> None:
    operations = _reconcile(
        [
            modify(2, "title", "early bird"),
            modify(2, "title", "late comer"),
        ]
    )

    assert operations == (
        UpdateOneObject(
            collection="lists", key_filter={"pk": "list-one"}, field_patch={"title": "early bird"}
        ),
    )


def test_writes_to_an_object_that_needs_deletion_are_ignored() -> None:
    operations = _reconcile(
        [
            modify(2, "title", "second"),
            delete(1),
        ]
    )

    assert operations == (DeleteOneObject(collection="lists", key_filter={"pk": "list-one"}),)


def test_writes_to_an_already_deleted_object_are_ignored() -> None:
    operations = _reconcile(
        [
            modify(2, "title", "second"),
            delete(4, synced_on=3),
            delete(1, synced_on=3),
        ]
    )

    assert operations == ()


def test_single_delete_emits_one_delete() -> None:
    operations = _reconcile([delete(1)])

    assert operations == (DeleteOneObject(collection="lists", key_filter={"pk": "list-one"}),)


def test_double_delete_emits_one_delete() -> None:
    operations = _reconcile([delete(4), delete(1)])

    assert operations == (DeleteOneObject(collection="lists", key_filter={"pk": "list-one"}),)


def test_delete_with_compound_key() -> None:
    operations = _reconcile([delete(4, collection="listEntry", pk=["list-one", 3])])

    assert operations == (
        DeleteOneObject(collection="listEntry", key_filter={"pk": ("list-one", 3)}),
    )


def test_writes_that_are_already_synced_are_ignored() -> None:
    operations = _reconcile(
        [
            modify(1, "title", "second"),
            modify(2, "title", "second", synced_on=3),
        ]
    )

    assert operations == ()


def test_only_unsynced_fields_emit_one_update_each() -> None:
    operations = _reconcile(
        [
            modify(1, "title", "groceries"),
            modify(2, "prio", 3, synced_on=4),
            modify(3, "color", "green"),
        ]
    )

    assert operations == (
        UpdateOneObject(
            collection="lists", key_filter={"pk": "list-one"}, field_patch={"title": "groceries"}
        ),
        UpdateOneObject(
            collection="lists", key_filter={"pk": "list-one"}, field_patch={"color": "green"}
        ),
    )


def test_create_object() -> None:
    operations = _reconcile([create(1, {"pk": "list-one", "title": "first"})])

    assert operations == (
        CreateObject(collection="lists", fields={"pk": "list-one", "title": "first"}),
    )


def test_creation_is_consolidated_with_later_update() -> None:
    operations = _reconcile(
        [
            create(1, {"pk": "list-one", "title": "first", "prio": 5}),
            modify(2, "title", "second"),
        ]
    )

    assert operations == (
        CreateObject(collection="lists", fields={"pk": "list-one", "title": "second", "prio": 5}),
    )


def test_creation_is_consolidated_with_update_folded_before_it() -> None:
    operations = _reconcile(
        [
            modify(2, "title", "second"),
            create(1, {"pk": "list-one", "title": "first", "prio": 5}),
        ]
    )

    assert operations == (
        CreateObject(collection="lists", fields={"pk": "list-one", "title": "second", "prio": 5}),
    )


@pytest.mark.parametrize("delete_first", [True, False])
def test_creation_and_deletion_cancel_out(delete_first: bool) -> None:
    entries: list[LogEntry] = [
        modify(2, "title", "second"),
        create(1, {"pk": "list-one", "title": "first", "prio": 5}),
    ]
    if delete_first:
        entries.insert(0, delete(3))
    else:
        entries.append(delete(3))

    assert _reconcile(entries) == ()


def test_double_create_fails_the_batch() -> None:
    result = reconcile_log_entries(
        [
            create(1, {"pk": "list-one", "title": "first", "prio": 5}, synced_on=1),
            create(2, {"pk": "list-one", "title": "first", "prio": 5}),
        ],
        key_resolver=pk_registry(),
    )

    assert isinstance(result, ReconciliationFailed)
    assert result.status is ResultStatus.FAILED
    assert result.anomaly == DoubleCreate("lists", "list-one")
    with pytest.raises(ReconciliationError) as exc:
        result.unwrap()
    assert str(exc.value) == "Detected double create in collection 'lists', pk '\"list-one\"'"
    assert exc.value.anomaly == DoubleCreate("lists", "list-one")


def test_modification_before_creation_fails_the_batch() -> None:
    result = reconcile_log_entries(
        [
            create(2, {"pk": "list-one", "title": "first"}),
            modify(1, "title", "impossible"),
        ],
        key_resolver=pk_registry(),
    )

    assert isinstance(result, ReconciliationFailed)
    assert result.anomaly == ModificationBeforeCreation("lists", "list-one")
    assert "before it was created (likely pk collision)" in result.anomaly.message


def test_anomaly_in_one_object_aborts_other_objects() -> None:
    emitted: list[str] = []

    def _emit(
        state: ObjectState, *, collection: str, key_fields: Mapping[str, Any]
    ) -> list[ExecutableOperation]:
        emitted.append(collection)
        return []

    engine = ReconciliationEngine(key_resolver=pk_registry(), emit=_emit)
    result = engine.reconcile(
        [
            modify(1, "title", "fine", collection="notes", pk="note-one"),
            create(1, {"title": "a"}),
            create(2, {"title": "b"}),
        ]
    )

    assert isinstance(result, ReconciliationFailed)
    assert emitted == []


def test_emission_follows_first_encounter_order() -> None:
    operations = _reconcile(
        [
            delete(5, collection="notes", pk="note-b"),
            modify(1, "title", "x", collection="lists", pk="list-z"),
            delete(1, collection="notes", pk="note-a"),
            modify(2, "title", "y", collection="lists", pk="list-a"),
        ]
    )

    assert [(operation.collection, dict(operation.key_filter)) for operation in operations] == [
        ("notes", {"pk": "note-b"}),
        ("notes", {"pk": "note-a"}),
        ("lists", {"pk": "list-z"}),
        ("lists", {"pk": "list-a"}),
    ]


def test_engine_passes_classified_entries_through_stages() -> None:
    observed: dict[str, object] = {}
    entry = modify(1, "title", "only")

    def _classify(entries: Iterable[LogEntry]) -> dict[str, dict[object, tuple[LogEntry, ...]]]:
        observed["classified"] = list(entries)
        return {"lists": {"list-one": (entry,)}}

    def _fold(entries: Iterable[LogEntry]) -> ObjectState:
        observed["folded"] = tuple(entries)
        return ObjectState(should_be_created=True, created_on=1)

    engine = ReconciliationEngine(key_resolver=pk_registry(), classify=_classify, fold=_fold)
    result = engine.reconcile([entry])

    assert isinstance(result, ReconciliationSucceeded)
    assert observed == {"classified": [entry], "folded": (entry,)}
    assert result.operations == (CreateObject(collection="lists", fields={"pk": "list-one"}),)
