"""Escscan, a scanner for redundant colour escapes in save files."""

__version__ = "0.1.0"
