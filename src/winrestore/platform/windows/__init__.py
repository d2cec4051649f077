"""Wrappers around external Windows command line tools."""

from .process import CommandError, CommandOutcome, SubprocessCommandRunner, pretty_command

__all__ = ["CommandError", "CommandOutcome", "SubprocessCommandRunner", "pretty_command"]
