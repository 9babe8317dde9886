"""Command-line tool for converting Line Rider track files."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .convert import convert
from .track import Format

_FORMATS = {fmt.value: fmt for fmt in Format}


def parse_format(name: str) -> Format:
    """Return the format named by a case-insensitive string."""
    try:
        return _FORMATS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Invalid format '{name}'. Must be one of: trackjson, lrb"
        ) from None


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lrformat",
        description="CLI for converting Line Rider file formats",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 1.0")
    parser.add_argument("input", help="path of the file to convert")
    parser.add_argument("from_format", metavar="from", help="format of the input")
    parser.add_argument("to_format", metavar="to", help="format of the output")
    parser.add_argument("output", nargs="?", help="path to write; stdout if omitted")
    return parser


class _Failure(Exception):
    def __init__(self, context: str, cause: BaseException) -> None:
        super().__init__(f"{context}: {cause}")


def _run(args: argparse.Namespace) -> None:
    try:
        source = parse_format(args.from_format)
    except ValueError as exc:
        raise _Failure("Failed to parse 'from' format", exc) from exc
    try:
        target = parse_format(args.to_format)
    except ValueError as exc:
        raise _Failure("Failed to parse 'to' format", exc) from exc

    try:
        data = Path(args.input).read_bytes()
    except OSError as exc:
        raise _Failure(f"Failed to open input file '{args.input}'", exc) from exc

    try:
        converted = convert(data, source, target)
    except ValueError as exc:
        raise _Failure("Conversion failed", exc) from exc

    if args.output is None:
        print(converted.decode("utf-8", errors="replace"))
        return
    try:
        Path(args.output).write_bytes(converted)
    except OSError as exc:
        raise _Failure(f"Failed to create output file '{args.output}'", exc) from exc
    print(f"Converted file saved to {args.output}")


def main(argv: list[str] | None = None) -> int:
    """Run the converter; return the process exit status."""
    args = _parser().parse_args(argv)
    try:
        _run(args)
    except _Failure as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())