#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
import time
from contextlib import ExitStack
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from logsync.adapters.jsonl import JsonLinesOperationWriter
from logsync.app import (
    pull_device_operations,
    push_entry_lines,
    reconcile_lines,
    register_sync_device,
)
from logsync.config import ConfigurationError, configure_logging, require_env_vars
from logsync.domain.reconciliation import ReconciliationError, ReconciliationFailed

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile and share sync log entries")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile", help="Reconcile a JSON lines file of log entries into operations"
    )
    reconcile.add_argument("file", help="Path to the entries file, or '-' for stdin")

    register = subparsers.add_parser("register-device", help="Register a device")
    register.add_argument("--user-id", required=True, help="Owner of the device")
    register.add_argument(
        "--shared-until",
        type=int,
        default=None,
        help="Initial high-water mark (defaults to config)",
    )

    push = subparsers.add_parser("push", help="Append local entries to the shared log")
    push.add_argument("file", help="Path to the entries file, or '-' for stdin")
    push.add_argument("--device-id", help="Device id (defaults to LOGSYNC_DEVICE_ID)")
    push.add_argument("--user-id", required=True, help="Owner of the entries")
    push.add_argument(
        "--shared-on",
        type=int,
        default=None,
        help="Shared-log timestamp for the entries (defaults to now, in milliseconds)",
    )

    pull = subparsers.add_parser(
        "pull", help="Reconcile unseen shared entries and print the resulting operations"
    )
    pull.add_argument("--device-id", help="Device id (defaults to LOGSYNC_DEVICE_ID)")
    pull.add_argument(
        "file",
        nargs="?",
        help="Optional JSON lines file of local entries to reconcile alongside",
    )
    return parser.parse_args(list(argv))


def _device_id(args: argparse.Namespace) -> str:
    if args.device_id:
        return args.device_id
    return require_env_vars(["LOGSYNC_DEVICE_ID"])["LOGSYNC_DEVICE_ID"]


def _open_lines(stack: ExitStack, path: str | None) -> Iterable[str]:
    if path is None:
        return ()
    if path == "-":
        return sys.stdin
    return stack.enter_context(Path(path).open(encoding="utf-8"))


def _run_reconcile(args: argparse.Namespace) -> int:
    with ExitStack() as stack:
        result = reconcile_lines(_open_lines(stack, args.file))
    if isinstance(result, ReconciliationFailed):
        print(f"Error: {result.anomaly.message}", file=sys.stderr)
        return 1
    JsonLinesOperationWriter()(result.operations)
    return 0


def _run_register(args: argparse.Namespace) -> int:
    device_id = register_sync_device(user_id=args.user_id, shared_until=args.shared_until)
    print(device_id)
    return 0


def _run_push(args: argparse.Namespace) -> int:
    shared_on = args.shared_on if args.shared_on is not None else time.time_ns() // 1_000_000
    with ExitStack() as stack:
        count = push_entry_lines(
            _open_lines(stack, args.file),
            device_id=_device_id(args),
            user_id=args.user_id,
            shared_on=shared_on,
        )
    log.info("Pushed %s entries", count)
    return 0


def _run_pull(args: argparse.Namespace) -> int:
    with ExitStack() as stack:
        pull_device_operations(
            device_id=_device_id(args),
            local_lines=_open_lines(stack, args.file),
        )
    return 0


_COMMANDS = {
    "reconcile": _run_reconcile,
    "register-device": _run_register,
    "push": _run_push,
    "pull": _run_pull,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        exit_code = _COMMANDS[parsed_args.command](parsed_args)
    except ReconciliationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except (ConfigurationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
