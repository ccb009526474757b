"""Command-line interface: check files that each hold one doc comment."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from doctor.ast import DocComment
from doctor.errors import ParseError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_files: list[Path]
    encoding: str
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="doctor",
        description="Check JavaDoc-style doc comments",
    )
    p.add_argument("inputs", nargs="+", help="Files, each containing exactly one doc comment")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover doctor.toml)",
    )
    p.add_argument(
        "--encoding",
        default=None,
        metavar="NAME",
        help="Source file encoding (default: utf-8)",
    )
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "doctor.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, search_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir if search_dir is not None else Path("."))

    encoding = "utf-8"
    cfg_encoding = config.get("encoding")
    if isinstance(cfg_encoding, str):
        encoding = cfg_encoding
    if args.encoding is not None:
        encoding = args.encoding

    debug = False
    cfg_debug = config.get("debug")
    if isinstance(cfg_debug, bool):
        debug = cfg_debug
    if args.debug:
        debug = True

    return CliOptions(
        input_files=[Path(p) for p in args.inputs],
        encoding=encoding,
        debug=debug,
    )


def check_file(path: Path, options: CliOptions) -> DocComment:
    """Read and parse one comment file, dumping the AST when debugging."""
    from doctor.debug import dump_ast
    from doctor.parser import parse

    # Editors add a final newline after the close marker; it is not part of the comment
    source = path.read_text(encoding=options.encoding).rstrip("\r\n")
    doc = parse(source)

    if options.debug:
        dump_ast(doc, file=sys.stderr)

    return doc


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    status = 0
    for path in options.input_files:
        try:
            check_file(path, options)
        except ParseError as exc:
            print(exc.format(str(path)), file=sys.stderr)
            status = max(status, 1)
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            print(f"error: cannot read {path}: {exc}", file=sys.stderr)
            status = 2

    return status


def run() -> None:
    """Console script wrapper around main()."""
    sys.exit(main())
