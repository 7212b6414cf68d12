"""Column settings inspection CLI.

Reads a default column schema (JSON array of column objects), merges the
record stored for a namespace on top of it exactly as an editor session
would, and prints the resulting sections. ``reset`` deletes the stored
record so the next session starts from the defaults.

Examples:
  python -m cli.columns show --defaults assets_columns.json --namespace assets_v2
  python -m cli.columns show --defaults assets_columns.json --search stat --json
  python -m cli.columns reset --namespace assets_v2 --data-dir ./data
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

from column_settings.models import ColumnConfig
from column_settings.services.column_persistence import (
    ColumnConfigPersistenceService,
    JsonFileKeyValueStore,
    merge_saved_columns,
)
from column_settings.services.section_view import derive_sections, summarize
from column_settings.settings import DATA_DIR, DEFAULT_NAMESPACE


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Inspect or reset persisted column settings")
    p.add_argument("--data-dir", default=DATA_DIR, help="Directory holding column settings files")
    p.add_argument("--namespace", default=DEFAULT_NAMESPACE, help="Persistence namespace key")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print merged sections for a namespace")
    show.add_argument("--defaults", required=True, help="JSON file with the default schema")
    show.add_argument("--search", default="", help="Filter columns by title substring")
    show.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    sub.add_parser("reset", help="Delete the stored record for a namespace")
    return p.parse_args(argv)


def _load_defaults(path: str) -> List[ColumnConfig]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError("defaults file must contain a JSON array")
    return [ColumnConfig.from_json_obj(entry) for entry in raw]


def _show(service: ColumnConfigPersistenceService, args: argparse.Namespace) -> int:
    try:
        defaults = _load_defaults(args.defaults)
        # Read-only: merge directly so a corrupt record is left in place.
        columns = merge_saved_columns(defaults, service.store.get(service.namespace))
    except (OSError, ValueError) as exc:
        print(f"Could not read defaults: {exc}", file=sys.stderr)
        return 2
    sections = derive_sections(columns, args.search)
    summary = summarize(columns)
    if args.json:
        payload: Dict[str, Any] = {
            "namespace": service.namespace,
            "summary": {
                "total": summary.total,
                "visible": summary.visible,
                "pinned": summary.pinned,
                "hidden": summary.hidden,
            },
            "sections": {s.kind.value: s.keys() for s in sections},
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0
    print(f"Column settings [{service.namespace}]: {summary.as_text()}")
    for section in sections:
        print(f"{section.label}:")
        for col in section.columns:
            flags = " (required)" if col.required else ""
            print(f"  - {col.title} [{col.key}] {col.effective_width}px{flags}")
    if args.search and not sections:
        print(f'No columns match "{args.search}"')
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    service = ColumnConfigPersistenceService(JsonFileKeyValueStore(args.data_dir), args.namespace)
    if args.command == "show":
        return _show(service, args)
    removed = service.clear()
    print(f"Reset {args.namespace}: {'removed stored record' if removed else 'nothing stored'}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
