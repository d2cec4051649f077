"""Command execution package for CLI."""

from winrestore.ui.cli.commands.list_features import ListCommand
from winrestore.ui.cli.commands.restore import RestoreCommand

__all__ = ["ListCommand", "RestoreCommand"]
