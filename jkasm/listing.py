"""Render an assembled program as address/word listings."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from tabulate import tabulate

from .asm import Program, format_word

FORMATS = ("text", "table", "json")


def format_text(pairs: Iterable[Tuple[int, str]]) -> List[str]:
    """One ``<address> <word>`` line per word, both as 4-digit octal."""
    return [f"{format_word(address)} {word}" for address, word in pairs]


def format_table(pairs: Sequence[Tuple[int, str]]) -> str:
    rows = [[format_word(address), word] for address, word in pairs]
    return tabulate(rows, headers=["address", "word"], tablefmt="github", disable_numparse=True)


def format_json(program: Program) -> str:
    payload: Dict[str, Any] = {
        "origin": format_word(program.origin),
        "words": [
            {"address": format_word(address), "word": word}
            for address, word in program.listing()
        ],
    }
    return json.dumps(payload, indent=2)


def render(program: Program, fmt: str = "text") -> str:
    """Return the full listing for ``program`` in one of :data:`FORMATS`."""
    if fmt == "json":
        return format_json(program) + "\n"
    pairs = program.listing()
    if fmt == "table":
        return format_table(pairs) + "\n"
    if fmt == "text":
        lines = format_text(pairs)
        return "".join(f"{line}\n" for line in lines)
    raise ValueError(f"unknown listing format '{fmt}'")
