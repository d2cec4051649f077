"""Summary: Filesystem helpers shared by restore adapters.
Why: Keep copy, directory creation and Windows path expansion in one place.
"""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Final

_PERCENT_VARIABLE: Final[re.Pattern[str]] = re.compile(r"%([A-Za-z_][A-Za-z0-9_()]*)%")
_POWERSHELL_VARIABLE: Final[re.Pattern[str]] = re.compile(r"\$env:([A-Za-z_][A-Za-z0-9_]*)")


class UndefinedVariableError(KeyError):
    """Raised when a path references an environment variable that is not set."""

    def __init__(self, variable: str, raw_path: str) -> None:
        super().__init__(variable)
        self.variable = variable
        self.raw_path = raw_path

    def __str__(self) -> str:
        return f"Environment variable '{self.variable}' is not set (in '{self.raw_path}')"


def expand_windows_path(raw_path: str, env: Mapping[str, str] | None = None) -> Path:
    """Expand ``%VAR%`` and ``$env:VAR`` references in ``raw_path``.

    Variable lookup is case-insensitive, matching Windows semantics.

    Raises:
        UndefinedVariableError: If a referenced variable is not defined.
    """

    mapping = env if env is not None else os.environ
    folded = {key.upper(): value for key, value in mapping.items()}

    def _lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        value = folded.get(name.upper())
        if value is None:
            raise UndefinedVariableError(name, raw_path)
        return value

    expanded = _PERCENT_VARIABLE.sub(_lookup, raw_path)
    expanded = _POWERSHELL_VARIABLE.sub(_lookup, expanded)
    return Path(expanded).expanduser()


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) if needed and return it."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def ensure_parent_directory(path: Path) -> Path:
    """Create the parent directory of ``path`` if needed and return it."""

    return ensure_directory(path.parent)


def copy_path(source: Path, destination: Path, *, exclude: Iterable[str] = ()) -> list[Path]:
    """Copy a file or merge a directory tree into ``destination``.

    Directory copies overwrite files that already exist at the destination and
    skip entries whose name matches one of the ``exclude`` globs.

    Returns:
        list[Path]: Destination files written.
    """

    patterns = tuple(exclude)
    if source.is_file():
        _ = ensure_parent_directory(destination)
        _ = shutil.copy2(source, destination)
        return [destination]

    written: list[Path] = []

    def _record(src: str, dst: str) -> str:
        result = shutil.copy2(src, dst)
        written.append(Path(dst))
        return result

    _ = shutil.copytree(
        source,
        destination,
        ignore=shutil.ignore_patterns(*patterns) if patterns else None,
        copy_function=_record,
        dirs_exist_ok=True,
    )
    return written


__all__ = [
    "UndefinedVariableError",
    "copy_path",
    "ensure_directory",
    "ensure_parent_directory",
    "expand_windows_path",
]
