"""Command-line interface for Fretwise."""

from .main import cli, main

__all__ = ["cli", "main"]
