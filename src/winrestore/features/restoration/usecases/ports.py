"""Ports for the restoration feature."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from winrestore.platform.windows.process import CommandOutcome

from ..domain.registry_document import RegistryValue


class FileSystemGateway(Protocol):
    """Abstract filesystem operations needed by the use cases."""

    def exists(self, path: Path) -> bool:
        """Return True if the path exists."""

        ...

    def is_dir(self, path: Path) -> bool:
        """Return True when the path points to a directory."""

        ...

    def list_files(self, directory: Path, pattern: str) -> list[Path]:
        """Return files directly inside ``directory`` matching ``pattern``, sorted by name."""

        ...

    def copy(self, source: Path, destination: Path, *, exclude: Iterable[str] = ()) -> list[Path]:
        """Copy a file or merge a directory into ``destination``; return files written."""

        ...


class RegistryGateway(Protocol):
    """Write to the Windows registry through an external tool."""

    def import_file(self, path: Path) -> None:
        """Import a ``.reg`` file; raise on failure."""

        ...

    def set_value(self, value: RegistryValue) -> None:
        """Create or overwrite a single registry value; raise on failure."""

        ...


class ServiceGateway(Protocol):
    """Control OS services around destructive restores."""

    def stop(self, name: str) -> bool:
        """Stop ``name``; return True when the service was running and is now stopped."""

        ...

    def start(self, name: str) -> None:
        """Start ``name``; raise on failure."""

        ...


class CommandGateway(Protocol):
    """Run external OS utilities."""

    def run(
        self,
        argv: Sequence[str],
        *,
        timeout: float | None = None,
        check: bool = False,
    ) -> CommandOutcome:
        """Run ``argv`` and return the outcome."""

        ...
