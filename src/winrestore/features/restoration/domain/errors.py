"""Exception hierarchy for feature restores.

Item-level errors are caught per item by the executor; feature-level errors
abort the restore of a feature.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RestoreResult


class WinRestoreError(Exception):
    """Base class for all errors raised by winrestore."""


class FeatureDefinitionError(WinRestoreError):
    """A feature definition file is missing fields or holds invalid values."""

    def __init__(self, source: Path | str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class UnknownFeatureError(WinRestoreError):
    """The requested feature is not present in the catalog."""

    def __init__(self, feature: str, available: list[str]) -> None:
        listing = ", ".join(available) or "none"
        super().__init__(f"Unknown feature '{feature}'. Available features: {listing}")
        self.feature = feature


class BackupNotFoundError(WinRestoreError):
    """Neither a machine-specific nor a shared backup exists for a feature."""

    def __init__(self, feature: str, candidates: list[Path]) -> None:
        probed = ", ".join(str(candidate) for candidate in candidates)
        super().__init__(f"No backup found for {feature} (looked in: {probed})")
        self.feature = feature
        self.candidates = candidates


class PrerequisiteError(WinRestoreError):
    """A prerequisite marked ``fail`` did not pass."""

    def __init__(self, feature: str, check: str, detail: str) -> None:
        super().__init__(f"Prerequisite '{check}' failed for {feature}: {detail}")
        self.feature = feature
        self.check = check


class ItemRestoreError(WinRestoreError):
    """Restoring a single item failed."""


class RegistryDocumentError(ItemRestoreError):
    """A registry values document could not be parsed or validated."""


class RestoreAbortedError(WinRestoreError):
    """An item failed without ``force``; carries the partial result."""

    def __init__(self, result: "RestoreResult", cause: BaseException) -> None:
        super().__init__(f"Restore of {result.feature} aborted: {cause}")
        self.result = result


__all__ = [
    "BackupNotFoundError",
    "FeatureDefinitionError",
    "ItemRestoreError",
    "PrerequisiteError",
    "RegistryDocumentError",
    "RestoreAbortedError",
    "UnknownFeatureError",
    "WinRestoreError",
]
