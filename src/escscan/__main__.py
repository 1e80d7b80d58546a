"""Run escscan as a module."""

from escscan.cli import app

app(prog_name="escscan")
