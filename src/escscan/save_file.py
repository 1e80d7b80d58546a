"""Read and decompress save files."""

import zlib
from pathlib import Path

from rich.markup import escape

from escscan.console import print_verbose

# Window bits selecting a gzip header and trailer around the deflate data
GZIP_WBITS = 16 + zlib.MAX_WBITS


class SaveFileError(Exception):
    """Save file could not be loaded."""

    verb = "load"

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize with the file path and failure reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot {self.verb} {path}: {reason}")

    def __rich__(self) -> str:
        """Rich formatted error message."""
        return (
            f"Cannot {self.verb} save file: "
            f"{escape(self.reason)}\n"
            f"[bold]File:[/] {escape(str(self.path))}"
        )


class SaveFileReadError(SaveFileError):
    """Save file could not be read from storage."""

    verb = "read"


class SaveFileDecompressError(SaveFileError):
    """Save file is not a valid gzip stream."""

    verb = "decompress"


def read_save_file(path: Path) -> bytes:
    """Read the raw, still compressed, bytes of a save file.

    Raises:
        SaveFileReadError: If the file cannot be read
    """
    print_verbose("Reading:", escape(str(path)))
    try:
        data = path.read_bytes()
    except OSError as error:
        reason = error.strerror or str(error)
        raise SaveFileReadError(path, reason) from error
    print_verbose(f"  {len(data)} bytes compressed")
    return data


def decompress(data: bytes, path: Path) -> bytes:
    """Decompress the first gzip member of data read from path.

    Bytes after the end of the first member, such as padding, a trailing
    checksum or further members, are ignored.

    Raises:
        SaveFileDecompressError: If data does not start with a complete gzip
            member
    """
    decompressor = zlib.decompressobj(wbits=GZIP_WBITS)
    try:
        result = decompressor.decompress(data)
    except zlib.error as error:
        raise SaveFileDecompressError(path, str(error)) from error
    if not decompressor.eof:
        reason = "Compressed stream ended before the end of the gzip member"
        raise SaveFileDecompressError(path, reason)
    if decompressor.unused_data:
        print_verbose(
            f"  Ignoring {len(decompressor.unused_data)} bytes after the"
            " gzip member"
        )
    print_verbose(f"  {len(result)} bytes decompressed")
    return result
