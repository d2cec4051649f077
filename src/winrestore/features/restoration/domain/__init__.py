"""Domain types for feature restores."""

from .errors import (
    BackupNotFoundError,
    FeatureDefinitionError,
    ItemRestoreError,
    PrerequisiteError,
    RegistryDocumentError,
    RestoreAbortedError,
    UnknownFeatureError,
    WinRestoreError,
)
from .filtering import select_items, unknown_names
from .models import (
    Check,
    CheckPolicy,
    CopyFileAction,
    ExecutionMode,
    FeatureDefinition,
    ImportRegistryAction,
    InvokeServiceAction,
    RestoreAction,
    RestoreItem,
    RestoreRequest,
    RestoreResult,
    SetRegistryValuesAction,
)

__all__ = [
    "BackupNotFoundError",
    "Check",
    "CheckPolicy",
    "CopyFileAction",
    "ExecutionMode",
    "FeatureDefinition",
    "FeatureDefinitionError",
    "ImportRegistryAction",
    "InvokeServiceAction",
    "ItemRestoreError",
    "PrerequisiteError",
    "RegistryDocumentError",
    "RestoreAbortedError",
    "RestoreAction",
    "RestoreItem",
    "RestoreRequest",
    "RestoreResult",
    "SetRegistryValuesAction",
    "UnknownFeatureError",
    "WinRestoreError",
    "select_items",
    "unknown_names",
]
