#!/usr/bin/env python3
"""Shared opcode definitions for the jkasm toolchain.

The machine only knows five instructions and two registers, so every legal
combination of mnemonic and register letters is listed explicitly instead
of being built from register flag bits. Keys are the lowercase mnemonic
followed by the canonical register string (``j``, ``k`` or ``jk``).
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

# Ordered list so docs and tooling can iterate in a stable order.
OPCODE_LIST: Tuple[Tuple[str, str], ...] = (
    ("stop", "0000"),
    ("twldj", "0500"),
    ("twldk", "0510"),
    ("twstj", "0540"),
    ("twstk", "0550"),
    ("andj", "1100"),
    ("andk", "1200"),
    ("andjk", "1300"),
    ("clrj", "1510"),
    ("clrk", "1610"),
    ("clrjk", "1710"),
)

OPCODES: Dict[str, str] = {key: word for key, word in OPCODE_LIST}

MNEMONICS: Tuple[str, ...] = ("stop", "twld", "twst", "and", "clr")

REGISTERS: Tuple[str, ...] = ("j", "k")

__all__ = [
    "OPCODE_LIST",
    "OPCODES",
    "MNEMONICS",
    "REGISTERS",
    "lookup",
]


def lookup(key: str) -> Optional[str]:
    """Return the machine word for ``key`` or ``None`` when it is not an opcode."""

    return OPCODES.get(key.lower())
