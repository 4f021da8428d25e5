"""
Pytest configuration and fixtures for jkasm tests.
"""
import textwrap

import pytest

from jkasm import asm as jk_asm


@pytest.fixture
def assemble_source():
    """Assemble a dedented multi-line source string."""

    def _assemble(src: str) -> jk_asm.Program:
        text = textwrap.dedent(src).strip("\n")
        lines = [f"{line}\n" for line in text.splitlines()]
        return jk_asm.assemble(lines)

    return _assemble


@pytest.fixture
def source_file(tmp_path):
    """Write a dedented source string to ``prog.jk`` and return its path."""

    def _write(src: str):
        path = tmp_path / "prog.jk"
        path.write_text(textwrap.dedent(src).lstrip("\n"), encoding="utf-8")
        return path

    return _write
