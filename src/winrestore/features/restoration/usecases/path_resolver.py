"""Summary: Locate the backup directory of a feature.
Why: Machine-specific backups win over the shared fallback in every restore.
"""

from __future__ import annotations

import logging
from logging import Logger
from pathlib import Path

from winrestore.config.paths import default_shared_root

from .ports import FileSystemGateway


def backup_candidates(
    *,
    feature_dir: str,
    backup_root: Path,
    machine_name: str,
    machine_path: Path | None = None,
    shared_path: Path | None = None,
) -> list[Path]:
    """Return the candidate feature directories in lookup order."""

    machine_root = machine_path if machine_path is not None else backup_root / machine_name
    shared_root = shared_path if shared_path is not None else default_shared_root(backup_root)
    candidates = [machine_root / feature_dir]
    shared_candidate = shared_root / feature_dir
    if shared_candidate != candidates[0]:
        candidates.append(shared_candidate)
    return candidates


def resolve_backup_path(
    filesystem: FileSystemGateway,
    *,
    feature_dir: str,
    backup_root: Path,
    machine_name: str,
    machine_path: Path | None = None,
    shared_path: Path | None = None,
    logger: Logger | None = None,
) -> Path | None:
    """Return the first existing candidate directory, or ``None``."""

    log = logger or logging.getLogger(__name__)
    for candidate in backup_candidates(
        feature_dir=feature_dir,
        backup_root=backup_root,
        machine_name=machine_name,
        machine_path=machine_path,
        shared_path=shared_path,
    ):
        if filesystem.is_dir(candidate):
            log.debug("Using backup directory %s", candidate)
            return candidate
        log.debug("No backup directory at %s", candidate)
    return None


__all__ = ["backup_candidates", "resolve_backup_path"]
