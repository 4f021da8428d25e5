"""jkasm command-line entry point."""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from pathlib import Path
from typing import List, Optional

from .asm import assemble, format_word
from .errors import AssemblerError, EmptySourceError, OutputWriteError, SourceError, SourceReadError
from .listing import FORMATS, render

LOG = logging.getLogger("jkasm.cli")

EXIT_OK = 0
EXIT_ASM_ERROR = 1
EXIT_SOURCE_ERROR = 2

STDIO = "-"

# Line breaks of a line-oriented reader: \n, \r or \r\n, nothing else.
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def read_source(path: str) -> List[str]:
    """Read every input line from ``path`` (``-`` is stdin), without line terminators."""
    try:
        if path == STDIO:
            text = sys.stdin.read()
        else:
            text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Error encountered while reading input: {exc}") from exc
    lines = LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    if not lines:
        raise EmptySourceError("Input stream EOF encountered before processing any input")
    return lines


def write_output(path: Optional[str], text: str) -> None:
    if path is None or path == STDIO:
        sys.stdout.write(text)
        return
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Error encountered while writing output: {exc}") from exc


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Two-register (j/k) toy assembler")
    parser.add_argument("input", nargs="?", default=STDIO, help="Assembly source file (default: stdin)")
    parser.add_argument("-o", "--output", help="Write the listing to this file instead of stdout")
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=os.environ.get("JKASM_FORMAT", "text"),
        help="Listing format (default text)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("JKASM_LOG", "WARNING"),
        help="Logging level (default WARNING)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="print assembly statistics to stderr")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.format not in FORMATS:
        parser.error(f"invalid listing format '{args.format}' (from JKASM_FORMAT); choose from {', '.join(FORMATS)}")
    _configure_logging(args.log_level)
    try:
        lines = read_source(args.input)
        program = assemble(lines)
        listing = render(program, args.format)
        write_output(args.output, listing)
    except AssemblerError as exc:
        LOG.debug("assembly failed: %s (%s)", exc.kind, exc.fragment)
        print(str(exc), file=sys.stderr)
        return EXIT_ASM_ERROR
    except SourceError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_SOURCE_ERROR
    if args.verbose:
        print(f"origin={format_word(program.origin)} words={len(program)}", file=sys.stderr)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI utility
    sys.exit(main())
