"""Scanner for redundantly escaped text runs.

A run is an opening sequence of ESC bytes, a body of text, and a closing
sequence of ESC bytes. Opening and closing escapes are told apart only by
their order around the text, the contents of the escape sequences are never
inspected.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from enum import Enum, auto

if typing.TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

ESCAPE = 0x1B
PRINTABLE_FIRST = 0x20
PRINTABLE_LAST = 0x7E


class State(Enum):
    """State machine states for escape run scanning."""

    OUTSIDE = auto()
    OPENING_ESCAPE = auto()
    IN_TEXT = auto()
    CLOSING_ESCAPE = auto()


class ByteClass(Enum):
    """Classes of bytes in the decompressed stream."""

    ESCAPE = auto()
    PRINTABLE = auto()
    OTHER = auto()


@dataclass(frozen=True)
class RedundantEscape:
    """Text run wrapped in at least the threshold number of escapes."""

    position: int
    escapes: int
    text: str


def classify_byte(byte: int) -> ByteClass:
    """Classify a byte as escape marker, printable ASCII, or other."""
    if byte == ESCAPE:
        return ByteClass.ESCAPE
    if PRINTABLE_FIRST <= byte <= PRINTABLE_LAST:
        return ByteClass.PRINTABLE
    return ByteClass.OTHER


class EscapeScanner:
    """State machine for finding redundantly escaped text runs."""

    def __init__(self, threshold: int) -> None:
        """Initialize the scanner with the minimum opening escape count."""
        if threshold < 0:
            msg = f"Threshold must not be negative: {threshold}"
            raise ValueError(msg)
        self.threshold = threshold
        self.state = State.OUTSIDE
        self.start_position = 0
        self.escapes = 0
        self.text = bytearray()
        self.valid = True

    def process_byte(
        self, offset: int, byte: int
    ) -> Iterator[RedundantEscape]:
        """Process the byte at offset and yield a completed run, if any."""
        byte_class = classify_byte(byte)

        if self.state == State.CLOSING_ESCAPE:
            if byte_class == ByteClass.ESCAPE:
                return
            # First byte after the closing escapes completes the run, then
            # gets evaluated again from OUTSIDE.
            if record := self._finalize():
                yield record
            self._reset_state()

        if self.state == State.OUTSIDE:
            if byte_class == ByteClass.ESCAPE:
                self.start_position = offset
                self.escapes = 1
                self.state = State.OPENING_ESCAPE
        elif self.state == State.OPENING_ESCAPE:
            if byte_class == ByteClass.ESCAPE:
                self.escapes += 1
            else:
                self.state = State.IN_TEXT
                self._capture(byte, byte_class)
        elif self.state == State.IN_TEXT:
            if byte_class == ByteClass.ESCAPE:
                self.state = State.CLOSING_ESCAPE
            else:
                self._capture(byte, byte_class)

    def _capture(self, byte: int, byte_class: ByteClass) -> None:
        """Append a text byte, or disqualify the run if it is not printable."""
        if byte_class == ByteClass.PRINTABLE:
            self.text.append(byte)
        else:
            self.valid = False

    def _finalize(self) -> RedundantEscape | None:
        """Build the record for a completed run if it qualifies."""
        if self.escapes < self.threshold or not self.valid or not self.text:
            return None
        return RedundantEscape(
            position=self.start_position,
            escapes=self.escapes,
            text=self.text.decode("ascii"),
        )

    def _reset_state(self) -> None:
        """Reset per-run state to OUTSIDE."""
        self.state = State.OUTSIDE
        self.start_position = 0
        self.escapes = 0
        self.text = bytearray()
        self.valid = True


def iter_escapes(
    data: Iterable[int], threshold: int
) -> Iterator[RedundantEscape]:
    """Yield redundantly escaped runs from a byte sequence.

    Args:
        data: Decompressed bytes, scanned in one pass
        threshold: Minimum number of opening ESC bytes to report a run

    Yields:
        Completed runs in input order. A run still open at the end of the
        data is dropped.
    """
    scanner = EscapeScanner(threshold)
    for offset, byte in enumerate(data):
        yield from scanner.process_byte(offset, byte)


def scan(data: Iterable[int], threshold: int) -> list[RedundantEscape]:
    """Return all redundantly escaped runs in data."""
    return list(iter_escapes(data, threshold))
