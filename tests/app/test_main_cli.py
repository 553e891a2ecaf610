from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import pytest

from logsync import main as main_module

if TYPE_CHECKING:
    from pathlib import Path


def _write_entries(path: Path, entries: list[dict[str, Any]]) -> Path:
    path.write_text("\n".join(json.dumps(entry) for entry in entries) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def pk_schema(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOGSYNC_SCHEMA_FILE", raising=False)
    monkeypatch.setenv("LOGSYNC_DEFAULT_PK_FIELD", "pk")


def test_reconcile_prints_operations(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    entries = _write_entries(
        tmp_path / "entries.jsonl",
        [
            {
                "operation": "create",
                "createdOn": 1,
                "syncedOn": None,
                "collection": "lists",
                "pk": "list-one",
                "value": {"pk": "list-one", "title": "first", "prio": 5},
            },
            {
                "operation": "modify",
                "createdOn": 2,
                "syncedOn": None,
                "collection": "lists",
                "pk": "list-one",
                "field": "title",
                "value": "second",
            },
        ],
    )

    main_module.main(["reconcile", str(entries)])

    output = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert output == [
        {
            "operation": "createObject",
            "collection": "lists",
            "args": [{"pk": "list-one", "title": "second", "prio": 5}],
        }
    ]


def test_reconcile_exits_on_anomaly(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    create = {
        "operation": "create",
        "createdOn": 1,
        "collection": "lists",
        "pk": "list-one",
        "value": {"title": "first"},
    }
    entries = _write_entries(tmp_path / "entries.jsonl", [create, {**create, "createdOn": 2}])

    with pytest.raises(SystemExit) as exc:
        main_module.main(["reconcile", str(entries)])

    assert exc.value.code == 1
    assert "Detected double create in collection 'lists'" in capsys.readouterr().err


def test_reconcile_rejects_invalid_entries(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    entries = tmp_path / "entries.jsonl"
    entries.write_text('{"operation": "create"}\n', encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main_module.main(["reconcile", str(entries)])

    assert exc.value.code == 2
    assert "Error:" in capsys.readouterr().err


def test_register_device_uses_config_default(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_register(**kwargs: object) -> str:
        captured.update(kwargs)
        return "device-1"

    monkeypatch.setattr(main_module, "register_sync_device", fake_register)

    main_module.main(["register-device", "--user-id", "user-1"])

    assert captured == {"user_id": "user-1", "shared_until": None}
    assert capsys.readouterr().out.strip() == "device-1"


def test_push_reads_device_from_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, Any] = {}

    def fake_push(lines: Any, **kwargs: object) -> int:
        captured["lines"] = list(lines)
        captured.update(kwargs)
        return len(captured["lines"])

    monkeypatch.setattr(main_module, "push_entry_lines", fake_push)
    monkeypatch.setenv("LOGSYNC_DEVICE_ID", "device-9")
    entries = _write_entries(
        tmp_path / "entries.jsonl",
        [{"operation": "delete", "createdOn": 1, "collection": "lists", "pk": "a"}],
    )

    main_module.main(["push", str(entries), "--user-id", "user-1", "--shared-on", "42"])

    assert captured["device_id"] == "device-9"
    assert captured["user_id"] == "user-1"
    assert captured["shared_on"] == 42
    assert len(captured["lines"]) == 1


def test_pull_requires_device_id(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("LOGSYNC_DEVICE_ID", raising=False)

    with pytest.raises(SystemExit) as exc:
        main_module.main(["pull"])

    assert exc.value.code == 2
    assert "LOGSYNC_DEVICE_ID" in capsys.readouterr().err


def test_verbose_flag_configures_debug_logging(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    levels: list[int] = []
    monkeypatch.setattr(
        main_module, "configure_logging", lambda *, level, **_: levels.append(level)
    )
    entries = _write_entries(tmp_path / "entries.jsonl", [])

    main_module.main(["--verbose", "reconcile", str(entries)])

    assert levels == [logging.DEBUG]
