#!/usr/bin/env python3
"""Assembler for the two-register j/k toy machine.

Each source line holds one instruction, optionally preceded by a single
``*<octal>`` origin directive on the first line. Instructions assemble to
one word (``STOP``, ``AND``, ``CLR``) or two words (``TWLD``, ``TWST``,
followed by their 12-bit address operand). Words are kept as 4-digit octal
strings exactly as they appear in the opcode table.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from .errors import (
    AddressOutOfRangeError,
    AssemblerError,
    DuplicateRegisterError,
    EmptyLineError,
    InternalEncoderError,
    InvalidOctalError,
    InvalidRegisterNameError,
    MalformedOperandError,
    MalformedSeparatorError,
    MissingOperandError,
    TooManyOperandsError,
    UnknownOpcodeError,
    UnrecognizedInstructionError,
)
from .opcodes import MNEMONICS, OPCODES, REGISTERS, lookup

LOGGER = logging.getLogger("jkasm.asm")

OPC = OPCODES

MAX_ADDRESS = (1 << 12) - 1
MAX_OPERANDS = 2
ORIGIN_MARKER = "*"

OCTAL_RE = re.compile(r"[+-]?[0-7]+")
OPERAND_SPLIT_RE = re.compile(r"[, ]+")

# Longest first, then alphabetical, so matching never depends on set order.
MATCH_ORDER: Tuple[str, ...] = tuple(sorted(MNEMONICS, key=lambda name: (-len(name), name)))


def parse_octal(token: str) -> int:
    """Decode octal ``token`` into a 12-bit address."""
    if not OCTAL_RE.fullmatch(token):
        raise InvalidOctalError(f"Invalid octal value, scanning :{token}:", fragment=token)
    value = int(token, 8)
    if value < 0 or value > MAX_ADDRESS:
        raise AddressOutOfRangeError(
            f"Invalid value to be represented in 12 bits, scanning {token}",
            fragment=token,
        )
    return value


def format_word(value: int) -> str:
    return f"{value:04o}"


def normalize_registers(tokens: Sequence[str]) -> str:
    """Return the canonical register string (``j``, ``k`` or ``jk``) for ``tokens``.

    ``["jk"]``, ``["kj"]``, ``["j", "k"]`` and ``["k", "j"]`` all normalise to
    ``"jk"``; the opcode table is keyed on that order only.
    """
    if not tokens:
        raise MissingOperandError("Missing register operand")
    if len(tokens) > MAX_OPERANDS:
        raise TooManyOperandsError(f"Too many registers, scanning {' '.join(tokens)}", fragment=" ".join(tokens))
    if len(tokens) == 1:
        token = tokens[0]
        if not token:
            raise MalformedOperandError("Empty register specification", fragment=token)
        if len(token) == 1:
            return token.lower()
        if len(token) > MAX_OPERANDS:
            raise MalformedOperandError(
                f"Register specification contains too many registers, scanning {token}",
                fragment=token,
            )
        return normalize_registers(list(token))

    first, second = tokens
    if first.lower() == second.lower():
        raise DuplicateRegisterError(f"Same register specified multiple times: {first}", fragment=first)
    named = {first.lower(), second.lower()}
    result = "".join(reg for reg in REGISTERS if reg in named)
    if len(result) != len(tokens):
        raise InvalidRegisterNameError(
            f"Invalid register names, scanning {first}:{second}",
            fragment=f"{first}:{second}",
        )
    return result


def recognize(line: str) -> Tuple[str, str]:
    """Split ``line`` into its lowercase mnemonic and the unexamined remainder."""
    trimmed = line.strip()
    if not trimmed:
        raise EmptyLineError("Empty input line found", fragment=line)
    lowered = trimmed.lower()
    for mnemonic in MATCH_ORDER:
        if len(trimmed) >= len(mnemonic) and lowered.startswith(mnemonic):
            return mnemonic, trimmed[len(mnemonic):]
    raise UnrecognizedInstructionError(f"Unrecognized instruction, scanning {trimmed}", fragment=trimmed)


def split_operands(remainder: str) -> List[str]:
    if remainder.startswith(","):
        raise MalformedSeparatorError(
            "Rule violation: only spaces may separate an opcode mnemonic from its operands, "
            f"scanning {remainder}",
            fragment=remainder,
        )
    tokens = [tok for tok in OPERAND_SPLIT_RE.split(remainder) if tok]
    if len(tokens) > MAX_OPERANDS:
        raise TooManyOperandsError(f"Too many operands, scanning {remainder}", fragment=remainder)
    return tokens


def lookup_word(mnemonic: str, registers: str = "") -> str:
    key = f"{mnemonic}{registers}".lower()
    word = lookup(key)
    if word is None:
        raise UnknownOpcodeError(f"Unable to determine opcode for {mnemonic}:{registers}", fragment=key)
    return word


def is_origin_directive(line: str) -> bool:
    return line.strip().startswith(ORIGIN_MARKER)


def parse_origin(line: str) -> int:
    """Return the load address named by a ``*<octal>`` directive line (``*`` alone means 0)."""
    trimmed = line.strip()
    if len(trimmed) < 2:
        return 0
    return parse_octal(trimmed[len(ORIGIN_MARKER):].strip())


@dataclass
class Program:
    """Append-only list of assembled words plus the address of the first one."""

    origin: int = 0
    words: List[str] = field(default_factory=list)
    _origin_set: bool = field(default=False, init=False, repr=False)

    def set_origin(self, address: int) -> None:
        if self._origin_set or self.words:
            raise RuntimeError("origin may only be set once, before any word is emitted")
        if address < 0 or address > MAX_ADDRESS:
            raise AddressOutOfRangeError(f"Origin out of 12-bit range: {address}", fragment=str(address))
        self.origin = address
        self._origin_set = True

    def append(self, word: str) -> None:
        self.words.append(word)

    def __len__(self) -> int:
        return len(self.words)

    def listing(self) -> List[Tuple[int, str]]:
        """Return ``(load address, word)`` pairs in program order."""
        pairs: List[Tuple[int, str]] = []
        for offset, word in enumerate(self.words):
            address = self.origin + offset
            if address > MAX_ADDRESS:
                raise AddressOutOfRangeError(
                    f"Invalid address detected, found {address:o}",
                    fragment=f"{address:o}",
                )
            pairs.append((address, word))
        return pairs


def encode(program: Program, mnemonic: str, remainder: str) -> Tuple[str, ...]:
    """Validate the operands of one instruction and append its words to ``program``."""
    tokens = split_operands(remainder)
    emitted: List[str] = []

    if mnemonic == "stop":
        if tokens:
            LOGGER.warning("ignoring operand text after STOP: %r", remainder.strip())
        emitted.append(lookup_word(mnemonic))
    elif mnemonic in ("twld", "twst"):
        if len(tokens) != 2:
            raise MissingOperandError(f"Missing operand, scanning {mnemonic}{remainder}", fragment=remainder)
        register_tok, address_tok = (tok.strip() for tok in tokens)
        emitted.append(lookup_word(mnemonic, normalize_registers([register_tok])))
        emitted.append(format_word(parse_octal(address_tok)))
    elif mnemonic in ("and", "clr"):
        if not tokens:
            raise MissingOperandError(f"Missing operand, scanning {mnemonic}{remainder}", fragment=remainder)
        emitted.append(lookup_word(mnemonic, normalize_registers(tokens)))
    else:
        raise InternalEncoderError(f"Internal error: invalid op, scanning {mnemonic}", fragment=mnemonic)

    for word in emitted:
        program.append(word)
    return tuple(emitted)


def assemble(lines: Iterable[str]) -> Program:
    """Assemble ``lines`` into a :class:`Program`, stopping at the first error."""
    program = Program()
    for lineno, line in enumerate(lines, start=1):
        try:
            if lineno == 1 and is_origin_directive(line):
                program.set_origin(parse_origin(line))
                LOGGER.info("origin set to %s", format_word(program.origin))
                continue
            mnemonic, remainder = recognize(line)
            emitted = encode(program, mnemonic, remainder)
        except AssemblerError as exc:
            if exc.lineno is None:
                exc.lineno = lineno
            raise
        LOGGER.debug("line %d: %s -> %s", lineno, line.strip(), " ".join(emitted))
    return program
