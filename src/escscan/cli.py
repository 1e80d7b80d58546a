"""Escscan command line interface.

Escscan looks for text in compressed save files that is wrapped in more colour
escape sequences than necessary.
"""

from dataclasses import dataclass
from pathlib import Path

import typer

import escscan
from escscan.console import (
    print_error,
    print_success,
    print_verbose,
    print_warning,
    set_verbose,
)
from escscan.save_file import SaveFileError, decompress, read_save_file
from escscan.scanner import scan

app = typer.Typer()


# ruff: noqa: FBT001 FBT003 Typer API uses boolean arguments for flags
# ruff: noqa: B008 function-call-in-default-argument


DEFAULT_ESCAPE_PAIRS = 3
ESCAPE_PAIRS_ENVVAR = "ESCSCAN_ESCAPE_PAIRS"


@dataclass(frozen=True)
class GlobalOptions:
    """Options and raw save file contents shared by all sub-commands."""

    save_file: Path
    compressed: bytes
    escape_pairs: int


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"escscan {escscan.__version__}")
        raise typer.Exit


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    save_file: Path = typer.Option(
        ..., "-s", "--save-file", metavar="FILE", help="Save file to read"
    ),
    escape_pairs: int = typer.Option(
        DEFAULT_ESCAPE_PAIRS,
        "-e",
        "--escape-pairs",
        min=0,
        envvar=ESCAPE_PAIRS_ENVVAR,
        help="Number of escape pairs to scan for",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show verbose output"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Escscan: find redundant colour escapes in save files."""
    _ = version
    if verbose:
        set_verbose()
    try:
        compressed = read_save_file(save_file)
    except SaveFileError as error:
        print_error(None, error)
        raise typer.Exit(1) from error

    typer.echo(f"File size: {len(compressed)} bytes")

    if ctx.invoked_subcommand is None:
        print_error(None, "No command specified")
        raise typer.Exit(1)
    ctx.obj = GlobalOptions(
        save_file=save_file,
        compressed=compressed,
        escape_pairs=escape_pairs,
    )


@app.command("scan")
def scan_command(ctx: typer.Context) -> None:
    """Scan the specified save file for redundant colour escapes."""
    options: GlobalOptions = ctx.obj
    try:
        data = decompress(options.compressed, options.save_file)
    except SaveFileError as error:
        print_error(None, error)
        raise typer.Exit(1) from error

    if not data:
        print_warning("Save file is empty after decompression")

    print_verbose("Escape threshold:", options.escape_pairs)
    records = scan(data, options.escape_pairs)
    print_success(f"Found {len(records)} redundant colour escapes")

    typer.echo(f"Redundant colour escapes: {records!r}")


if __name__ == "__main__":
    app()
