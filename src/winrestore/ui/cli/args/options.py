"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class RestoreArgs:
    """Command line arguments for the ``restore`` subcommand."""

    command: Literal["restore"]
    features: tuple[str, ...]
    all_features: bool
    backup_root: Path | None
    machine_name: str | None
    machine_path: Path | None
    shared_path: Path | None
    include: tuple[str, ...]
    exclude: tuple[str, ...]
    force: bool
    dry_run: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ListArgs:
    """Command line arguments for the ``list`` subcommand."""

    command: Literal["list"]
    show_items: bool
    verbose: bool
    quiet: bool


CLIArgs = RestoreArgs | ListArgs

__all__ = ["CLIArgs", "ListArgs", "RestoreArgs"]
