"""Shared path utilities for configuration, data and backup locations.

This module centralizes how the application discovers locations for
config, logs and backups.

Policy (portable by default):
- Config: repository-root ``<repo_root>/config/config.toml`` unless
  overridden by ``WINRESTORE_CONFIG``.
- Logs: repository-root ``<repo_root>/logs/winrestore.log``.
- Data: repository-root ``<repo_root>/.data`` unless overridden by
  ``WINRESTORE_DATA_DIR``.
- Backups: ``<data_dir>/backups`` unless overridden by
  ``WINRESTORE_BACKUP_ROOT`` or the config file.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


ENV_CONFIG_PATH: Final[str] = "WINRESTORE_CONFIG"
ENV_DATA_DIR: Final[str] = "WINRESTORE_DATA_DIR"
ENV_BACKUP_ROOT: Final[str] = "WINRESTORE_BACKUP_ROOT"
ENV_MACHINE_NAME: Final[str] = "WINRESTORE_MACHINE_NAME"

SHARED_DIR_NAME: Final[str] = "shared"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Detect the repository root by walking up parents.

    Looks for markers like ``pyproject.toml`` or ``.git``.

    Args:
        start: Starting path. Defaults to this file's directory.

    Returns:
        Path: Detected repository root, or the current working directory
        if no marker is found.
    """
    here = (start or Path(__file__).resolve()).parent
    for p in [here, *here.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return Path.cwd()


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the path to the main TOML config file."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=ENV_CONFIG_PATH,
        default_factory=lambda: _detect_repo_root() / "config" / "config.toml",
    )


def default_data_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the default directory for application data."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=ENV_DATA_DIR,
        default_factory=lambda: _detect_repo_root() / ".data",
    )


def default_backup_root(env: Mapping[str, str] | None = None) -> Path:
    """Get the default backup root holding one directory per machine."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=ENV_BACKUP_ROOT,
        default_factory=lambda: default_data_dir(env) / "backups",
    )


def default_shared_root(backup_root: Path) -> Path:
    """Return the shared fallback location below ``backup_root``."""

    return backup_root / SHARED_DIR_NAME


def default_machine_name(env: Mapping[str, str] | None = None) -> str:
    """Return the machine identity used to locate machine-specific backups.

    ``WINRESTORE_MACHINE_NAME`` wins, then ``COMPUTERNAME`` (set on Windows),
    then the network node name.
    """

    mapping = env if env is not None else os.environ
    for variable in (ENV_MACHINE_NAME, "COMPUTERNAME"):
        value = (mapping.get(variable) or "").strip()
        if value:
            return value
    return platform.node() or "localhost"


def default_log_dir() -> Path:
    """Get the default directory for log files."""

    return (_detect_repo_root() / "logs").resolve()


def default_log_file() -> Path:
    """Get the default log file path."""

    return (default_log_dir() / "winrestore.log").resolve()


__all__ = [
    "ENV_BACKUP_ROOT",
    "ENV_CONFIG_PATH",
    "ENV_DATA_DIR",
    "ENV_MACHINE_NAME",
    "SHARED_DIR_NAME",
    "default_backup_root",
    "default_config_path",
    "default_data_dir",
    "default_log_dir",
    "default_log_file",
    "default_machine_name",
    "default_shared_root",
    "resolve_overridable_path",
]
