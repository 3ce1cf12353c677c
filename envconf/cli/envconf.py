"""envconf CLI entrypoint.

Subcommands:
    vars   List the environment variables a record class reads, with defaults.
    show   Populate a record class from the current environment and print it as JSON.

Usage:
    envconf vars myapp.settings:Settings --prefix MYAPP
    envconf show myapp.settings:Settings --prefix MYAPP --item-delimiter ";"
"""

from __future__ import annotations

import argparse
import dataclasses
import importlib
import json
import logging
import sys
from typing import Any, Optional, Sequence, TextIO

from pydantic import BaseModel

from envconf.core.converter import DEFAULT_ITEM_DELIMITER, DEFAULT_KV_DELIMITER
from envconf.core.populator import iter_variables, unmarshal
from envconf.errors.errors import EnvConfError
from envconf.types.types import is_record_type

EXIT_OK = 0
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """
    Return the top-level CLI argument parser.
    """
    p = argparse.ArgumentParser(prog="envconf")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for envconf events",
    )
    sub = p.add_subparsers(dest="command", required=True)

    def add_common(sp: argparse.ArgumentParser) -> None:
        """Add arguments shared across all subcommands."""
        sp.add_argument("record", metavar="MODULE:CLASS", help="Import path of the record class")
        sp.add_argument("--prefix", required=True, help="Environment variable prefix")

    vs = sub.add_parser("vars", help="List environment variables read for a record")
    add_common(vs)

    show = sub.add_parser("show", help="Populate a record from the environment and print it")
    add_common(show)
    show.add_argument("--item-delimiter", default=DEFAULT_ITEM_DELIMITER)
    show.add_argument("--kv-delimiter", default=DEFAULT_KV_DELIMITER)
    show.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    return p


def load_record_class(path: str) -> type:
    """Import `module:Class` and check that it names a record class."""
    module_name, sep, attr = path.partition(":")
    if sep == "" or not module_name or not attr:
        raise ValueError(f"record must use MODULE:CLASS format (got {path!r})")

    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    if not is_record_type(obj):
        raise TypeError(f"{path} is not a dataclass or pydantic model")
    return obj


def to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return {name: to_jsonable(getattr(value, name)) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def run_vars(record_cls: type, prefix: str, out: TextIO) -> int:
    for var in iter_variables(record_cls, prefix):
        out.write(f"{var.name}={var.default}  # {var.field_path} ({var.type_name})\n")
    return EXIT_OK


def run_show(
    record_cls: type,
    prefix: str,
    item_delimiter: str,
    kv_delimiter: str,
    out: TextIO,
    indent: int = 2,
) -> int:
    record = record_cls()
    unmarshal(record, prefix, item_delimiter, kv_delimiter)
    out.write(json.dumps(to_jsonable(record), indent=indent or None) + "\n")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint wrapper compatible with setuptools scripts."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        record_cls = load_record_class(args.record)
        if args.command == "vars":
            return run_vars(record_cls, args.prefix, sys.stdout)
        return run_show(
            record_cls,
            args.prefix,
            args.item_delimiter,
            args.kv_delimiter,
            sys.stdout,
            indent=args.indent,
        )
    except (EnvConfError, ImportError, AttributeError, TypeError, ValueError) as e:
        print(f"envconf: error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
