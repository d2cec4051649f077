"""Command line interface package."""

from winrestore.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
