"""CLI for inspecting and checking YAML enum declarations."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from enumfield.config import get_settings
from enumfield.errors import DefinitionError
from enumfield.logging import setup_logging
from enumfield.sources import build_registry, load_declarations


def _load_registries(path: str, only: str | None = None):
    declarations = load_declarations(path)
    if only is not None:
        if only not in declarations:
            raise DefinitionError(f"{path}: no enum field '{only}'")
        declarations = {only: declarations[only]}
    return {field: build_registry(source, field=field) for field, source in declarations.items()}


def cmd_show(args: argparse.Namespace) -> int:
    """Print each declared field's values in display order."""
    registries = _load_registries(args.path, args.field)

    if args.json:
        payload = {
            field: [value.model_dump() for value in registry.values()]
            for field, registry in registries.items()
        }
        print(json.dumps(payload, indent=2))
        return 0

    for field, registry in registries.items():
        default = registry.default()
        print(f"{field} ({len(registry)} values, default: {default.name if default else '-'})")
        for value in registry.values():
            marker = "*" if value.is_default() else " "
            print(f"  {marker} {value.id:>4}  {value.name:<20} {value.title:<24} {value.position}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Validate a declaration file; exit non-zero on the first problem."""
    registries = _load_registries(args.path)
    total = sum(len(r) for r in registries.values())
    print(f"OK: {len(registries)} field(s), {total} value(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enumfield",
        description="enumfield – inspect enum declarations",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_show = sub.add_parser("show", help="List declared values in display order")
    p_show.add_argument("path", help="Path to YAML declaration file")
    p_show.add_argument("--field", default=None, help="Only show this field")
    p_show.add_argument("--json", action="store_true", help="Print values as JSON")
    p_show.set_defaults(func=cmd_show)

    p_check = sub.add_parser("check", help="Validate a YAML declaration file")
    p_check.add_argument("path", help="Path to YAML declaration file")
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    setup_logging(get_settings().log_level.value)
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except DefinitionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
