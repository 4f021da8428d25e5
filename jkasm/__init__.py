"""
jkasm - assembler for the two-register (j/k) toy machine.

    opcodes.py  → the mnemonic + register opcode table
    asm.py      → operand normalisation, instruction recognition, encoding
    listing.py  → text / table / JSON renderings of an assembled program
    cli.py      → command-line entry point and exit codes
"""

from .asm import Program, assemble, normalize_registers, recognize  # noqa: F401
from .errors import AssemblerError, SourceError  # noqa: F401

__all__ = [
    "Program",
    "assemble",
    "normalize_registers",
    "recognize",
    "AssemblerError",
    "SourceError",
]

__version__ = "0.1.0"
