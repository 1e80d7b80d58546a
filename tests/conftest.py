"""Common test fixtures."""

from __future__ import annotations

import gzip
from dataclasses import dataclass, field
from io import StringIO
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from rich.console import Console

import escscan.console

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@dataclass
class ConsoleFixture:
    """Console output fixture that tracks whether output was checked.

    Usage patterns:
    1. Verify specific output: assert "expected" in console_out.getvalue()
    2. No output expected: don't call getvalue(), fixture verifies empty
    3. Ignore output: call console_out.ignore_output()
    """

    _output: StringIO
    _checked: bool = field(default=False, init=False)

    def getvalue(self) -> str:
        """Get console output, marking it as checked."""
        self._checked = True
        return self._output.getvalue()

    def ignore_output(self) -> None:
        """Mark output as intentionally ignored."""
        self._checked = True

    def assert_no_unexpected_output(self) -> None:
        """Assert no unexpected output if not already checked."""
        if not self._checked:
            output = self._output.getvalue()
            assert output == "", "Unexpected console output"


@pytest.fixture
def console_out() -> Iterator[ConsoleFixture]:
    """Patch console with test console using StringIO (no colors)."""
    escscan.console._verbose = False
    output = StringIO()
    test_console = Console(file=output, force_terminal=False, width=200)
    fixture = ConsoleFixture(output)

    with patch("escscan.console._console", test_console):
        yield fixture

    escscan.console._verbose = False
    fixture.assert_no_unexpected_output()


@pytest.fixture
def make_save_file(tmp_path: Path) -> Callable[[bytes], Path]:
    """Return a function writing gzip-compressed content to a save file."""

    def make(content: bytes, name: str = "game.sav") -> Path:
        path = tmp_path / name
        path.write_bytes(gzip.compress(content))
        return path

    return make
