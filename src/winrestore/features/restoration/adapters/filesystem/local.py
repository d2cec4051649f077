"""Filesystem adapter for restoration use cases."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from winrestore.platform.filesystem import copy_path

from ...usecases.ports import FileSystemGateway


class LocalFileSystemGateway(FileSystemGateway):
    """Thin wrapper around the local filesystem."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_files(self, directory: Path, pattern: str) -> list[Path]:
        try:
            return sorted(entry for entry in directory.glob(pattern) if entry.is_file())
        except OSError:
            return []

    def copy(self, source: Path, destination: Path, *, exclude: Iterable[str] = ()) -> list[Path]:
        return copy_path(source, destination, exclude=exclude)


__all__ = ["LocalFileSystemGateway"]
