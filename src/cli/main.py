"""Keeplog CLI entry points.
This module exposes non-interactive commands for persistent entity logs.
It maps argparse commands onto log load, add, and save calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
import sys
from typing import Sequence

from core.config import KeeplogConfig
from core.errors import EntityCodecError, KeeplogError
from store.entity_payload import ENTITY_KINDS, entity_from_payload, entity_kind, entity_to_payload
from store.persistent_log import PersistentLog


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="keeplog", description="Keeplog entity log CLI")
    parser.add_argument("--data-root", help="Override KEEPLOG_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("kinds", help="List supported entity kinds")
    _add_add_command(subparsers)
    _add_list_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Keeplog CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.data_root)
        if args.command == "kinds":
            return _run_kinds_command()
        if args.command == "add":
            return _run_add_command(config, args)
        if args.command == "list":
            return _run_list_command(config, args)
    except (KeeplogError, EntityCodecError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(data_root: str | None) -> KeeplogConfig:
    """Build config with optional data-root override."""
    config = KeeplogConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return config


def _add_add_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("add", help="Append one entity to a log")
    parser.add_argument("log", help="Log name under the data root")
    parser.add_argument("--kind", required=True, choices=sorted(ENTITY_KINDS))
    parser.add_argument(
        "--field",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Entity field; VALUE is parsed as JSON when possible, else kept as text",
    )


def _add_list_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("list", help="Print all entities in a log")
    parser.add_argument("log", help="Log name under the data root")
    parser.add_argument("--kind", required=True, choices=sorted(ENTITY_KINDS))


def _run_kinds_command() -> int:
    for kind_name in sorted(ENTITY_KINDS):
        print(kind_name)
    return 0


def _run_add_command(config: KeeplogConfig, args: argparse.Namespace) -> int:
    """Handle add command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    entity_type = entity_kind(args.kind)
    entity = entity_from_payload(entity_type, _parse_fields(args.field))
    config.data_root.mkdir(parents=True, exist_ok=True)
    log = _open_log(config, args.log, entity_type)
    log.add(entity)
    log.save_to_file()
    print(entity.id)
    return 0


def _run_list_command(config: KeeplogConfig, args: argparse.Namespace) -> int:
    """Handle list command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    log = _open_log(config, args.log, entity_kind(args.kind))
    for entity in log.get_all():
        print(json.dumps(entity_to_payload(entity), ensure_ascii=False))
    return 0


def _open_log(config: KeeplogConfig, log_name: str, entity_type: type) -> PersistentLog:
    log = PersistentLog(config.log_path(log_name), entity_type, json_indent=config.json_indent)
    log.load_from_file()
    return log


def _parse_fields(raw_fields: list[str]) -> dict[str, object]:
    """Parse KEY=VALUE pairs into a payload dictionary.

    Raises:
        EntityCodecError: If a pair has no ``=`` separator.
    """
    payload: dict[str, object] = {}
    for raw_field in raw_fields:
        key, separator, raw_value = raw_field.partition("=")
        if not separator or not key:
            raise EntityCodecError(f"Invalid field '{raw_field}': expected KEY=VALUE")
        payload[key] = _parse_field_value(raw_value)
    return payload


def _parse_field_value(raw_value: str) -> object:
    """Return JSON integers and quoted strings as parsed, anything else as text."""
    try:
        value = json.loads(raw_value)
    except json.JSONDecodeError:
        return raw_value
    if isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool)):
        return value
    return raw_value
