"""Use cases for feature restores."""

from .action_executor import ActionExecutor
from .path_resolver import backup_candidates, resolve_backup_path
from .restore_feature import RestorationService
from .service_lifecycle import ServiceLifecycle

__all__ = [
    "ActionExecutor",
    "RestorationService",
    "ServiceLifecycle",
    "backup_candidates",
    "resolve_backup_path",
]
