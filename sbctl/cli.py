"""Command line entry point."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from .config import ConfigError, State, default_config, new_config
from .fsutil import read_file
from .output import Printer
from .status import collect_status, print_status

VERSION = "unknown"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sbctl", description="Secure Boot key manager")
    parser.add_argument("--json", action="store_true", help="output as JSON")
    parser.add_argument("--config", default="", help="path to a configuration file")
    parser.add_argument("--root", default="/", help="file system root to inspect")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("status", help="Show current boot status")
    commands.add_parser("version", help="Print sbctl version")
    return parser


def _json_out(data: Any) -> None:
    print(json.dumps(data, indent=2))


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    printer = Printer()

    if args.command == "version":
        print(VERSION)
        return 0

    try:
        config = new_config(read_file(args.config)) if args.config else default_config()
        state = State(config=config, root=args.root)
        status = collect_status(state)
    except (OSError, ConfigError, RuntimeError) as exc:
        printer.error(exc)
        return 1

    if args.json:
        _json_out(status.to_dict())
    else:
        print_status(status, printer)
    return 0


if __name__ == "__main__":
    sys.exit(main())