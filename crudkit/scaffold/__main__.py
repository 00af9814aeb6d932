"""Command line entry point: ``python -m crudkit.scaffold addmodule <name>``."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from crudkit.scaffold import add_module, delete_module

logger = logging.getLogger("crudkit.scaffold.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate or remove feature modules")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("addmodule", help="Create a feature module from the template")
    add.add_argument("name", help="Module name, e.g. product or blogEntry")
    add.add_argument("--dest", type=Path, default=None, help="Features directory (default: crudkit/features)")

    remove = sub.add_parser("deletemodule", help="Remove a generated feature module")
    remove.add_argument("name")
    remove.add_argument("--dest", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        if args.command == "addmodule":
            created = add_module(args.name, args.dest)
            print(f"Created module {args.name} ({len(created)} files).")
            print("Enable it by adding its `module` to FEATURES in crudkit/features/__init__.py.")
        else:
            path = delete_module(args.name, args.dest)
            print(f"Deleted module {args.name} ({path}).")
            print("Remove it from FEATURES in crudkit/features/__init__.py.")
    except (ValueError, FileExistsError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
