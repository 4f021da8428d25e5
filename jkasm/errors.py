"""Exception hierarchy shared by the assembler and its command-line front end."""

from __future__ import annotations

from typing import Optional


class AssemblerError(ValueError):
    """Raised when a source line cannot be assembled.

    ``kind`` names the failure, ``fragment`` is the offending piece of input
    and ``lineno`` is the 1-based source line, attached by the driver once it
    knows which line was being processed.
    """

    kind = "AssemblerError"

    def __init__(self, message: str, *, fragment: Optional[str] = None, lineno: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.fragment = fragment
        self.lineno = lineno

    def __str__(self) -> str:
        if self.lineno is None:
            return self.message
        return f"line {self.lineno}: {self.message}"


class EmptyLineError(AssemblerError):
    kind = "EmptyLine"


class UnrecognizedInstructionError(AssemblerError):
    kind = "UnrecognizedInstruction"


class MalformedSeparatorError(AssemblerError):
    kind = "MalformedSeparator"


class TooManyOperandsError(AssemblerError):
    kind = "TooManyOperands"


class MissingOperandError(AssemblerError):
    kind = "MissingOperand"


class MalformedOperandError(AssemblerError):
    kind = "MalformedOperand"


class DuplicateRegisterError(AssemblerError):
    kind = "DuplicateRegister"


class InvalidRegisterNameError(AssemblerError):
    kind = "InvalidRegisterName"


class UnknownOpcodeError(AssemblerError):
    kind = "UnknownOpcode"


class InvalidOctalError(AssemblerError):
    kind = "InvalidOctal"


class AddressOutOfRangeError(AssemblerError):
    kind = "AddressOutOfRange"


class InternalEncoderError(AssemblerError):
    """Raised when the recognizer hands the encoder a mnemonic it cannot encode."""

    kind = "InternalEncoderError"


class SourceError(RuntimeError):
    """Raised when the input lines cannot be obtained."""


class SourceReadError(SourceError):
    """Raised when the input file or stream fails to open or read."""


class EmptySourceError(SourceError):
    """Raised when the input ends before a single line was read."""


class OutputWriteError(SourceError):
    """Raised when the listing cannot be written to its destination."""


__all__ = [
    "AssemblerError",
    "EmptyLineError",
    "UnrecognizedInstructionError",
    "MalformedSeparatorError",
    "TooManyOperandsError",
    "MissingOperandError",
    "MalformedOperandError",
    "DuplicateRegisterError",
    "InvalidRegisterNameError",
    "UnknownOpcodeError",
    "InvalidOctalError",
    "AddressOutOfRangeError",
    "InternalEncoderError",
    "SourceError",
    "SourceReadError",
    "EmptySourceError",
    "OutputWriteError",
]
