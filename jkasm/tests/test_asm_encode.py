from __future__ import annotations

import logging

import pytest

from jkasm import asm as jk_asm
from jkasm import errors


def _words(line: str):
    return jk_asm.assemble([line]).words


def test_two_word_load():
    assert _words("TWLD j, 17") == ["0500", "0017"]


def test_two_word_store_without_space_after_comma():
    assert _words("twst k,7777") == ["0550", "7777"]


@pytest.mark.parametrize("line", ["AND kj", "AND jk", "and k, j", "AND j k", "ANDkj"])
def test_and_register_order_independent(line):
    assert _words(line) == ["1300"]


@pytest.mark.parametrize(("line", "expected"), [("CLR K", ["1610"]), ("clr k j", ["1710"]), ("CLRj", ["1510"])])
def test_clear(line, expected):
    assert _words(line) == expected


def test_leading_comma_is_a_separator_violation():
    with pytest.raises(errors.MalformedSeparatorError, match="Rule violation"):
        _words("AND,j")


@pytest.mark.parametrize("line", ["AND j, k, j", "TWLD j 1 2", "STOP a b c"])
def test_too_many_operands(line):
    with pytest.raises(errors.TooManyOperandsError, match="Too many operands"):
        _words(line)


@pytest.mark.parametrize("line", ["TWLD j", "TWST", "AND", "CLR  "])
def test_missing_operand(line):
    with pytest.raises(errors.MissingOperandError):
        _words(line)


@pytest.mark.parametrize("line", ["TWLD jk, 17", "TWST kj, 1"])
def test_two_word_instructions_take_one_register(line):
    with pytest.raises(errors.UnknownOpcodeError, match="Unable to determine opcode"):
        _words(line)


@pytest.mark.parametrize("line", ["TWLD j, 8", "TWLD j, 0o17", "TWST k, x", "TWLD j, k"])
def test_address_must_be_octal(line):
    with pytest.raises(errors.InvalidOctalError, match="Invalid octal value"):
        _words(line)


@pytest.mark.parametrize("line", ["TWLD j, 10000", "TWST k, -1"])
def test_address_must_fit_12_bits(line):
    with pytest.raises(errors.AddressOutOfRangeError, match="12 bits"):
        _words(line)


def test_register_checked_before_address():
    with pytest.raises(errors.UnknownOpcodeError):
        _words("TWLD x, 99")


def test_stop_ignores_trailing_operands(caplog):
    caplog.set_level(logging.WARNING, logger="jkasm.asm")
    assert _words("STOP now") == ["0000"]
    assert "ignoring operand text after STOP" in caplog.text


def test_stop_still_checks_separator():
    with pytest.raises(errors.MalformedSeparatorError):
        _words("STOP,")


def test_unsupported_mnemonic_is_internal_error():
    program = jk_asm.Program()
    with pytest.raises(errors.InternalEncoderError):
        jk_asm.encode(program, "mov", " j")
    assert program.words == []


def test_encode_returns_emitted_words():
    program = jk_asm.Program()
    assert jk_asm.encode(program, "twst", " j, 12") == ("0540", "0012")
    assert jk_asm.encode(program, "clr", " jk") == ("1710",)
    assert program.words == ["0540", "0012", "1710"]


def test_first_error_stops_assembly(assemble_source):
    with pytest.raises(errors.DuplicateRegisterError) as excinfo:
        assemble_source(
            """
            AND j
            CLR j, j
            STOP
            """
        )
    assert excinfo.value.lineno == 2
    assert excinfo.value.kind == "DuplicateRegister"


def test_small_program(assemble_source):
    program = assemble_source(
        """
        *200
        TWLD j, 1000
        TWLD k, 1001
        AND kj
        TWST j, 1002
        CLR j k
        STOP
        """
    )
    assert program.origin == 0o200
    assert program.words == ["0500", "1000", "0510", "1001", "1300", "0540", "1002", "1710", "0000"]
