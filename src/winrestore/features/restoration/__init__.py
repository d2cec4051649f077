"""Public surface for the restoration feature."""

from .domain.errors import (
    BackupNotFoundError,
    PrerequisiteError,
    RestoreAbortedError,
    WinRestoreError,
)
from .domain.models import ExecutionMode, FeatureDefinition, RestoreRequest, RestoreResult
from .usecases.restore_feature import RestorationService

__all__ = [
    "BackupNotFoundError",
    "ExecutionMode",
    "FeatureDefinition",
    "PrerequisiteError",
    "RestorationService",
    "RestoreAbortedError",
    "RestoreRequest",
    "RestoreResult",
    "WinRestoreError",
]
