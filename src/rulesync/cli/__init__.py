"""Rulesync command-line interface."""

from rulesync.cli.main import cli, main

__all__ = ["cli", "main"]
