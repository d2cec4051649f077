"""Command line argument handling package."""

from winrestore.ui.cli.args.options import CLIArgs, ListArgs, RestoreArgs
from winrestore.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "ListArgs", "RestoreArgs"]
