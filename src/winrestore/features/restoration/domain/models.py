"""Data structures that describe feature restores and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import ClassVar, Final


class ExecutionMode(str, Enum):
    """Whether a restore mutates the system or only reports would-be actions."""

    DRY_RUN = "dry_run"
    LIVE = "live"

    @property
    def is_dry_run(self) -> bool:
        return self is ExecutionMode.DRY_RUN

    @staticmethod
    def from_flag(dry_run: bool) -> "ExecutionMode":
        return ExecutionMode.DRY_RUN if dry_run else ExecutionMode.LIVE


class CheckPolicy(str, Enum):
    """How a failing check affects the feature restore."""

    WARN = "warn"
    FAIL = "fail"

    @staticmethod
    def from_user_input(value: str) -> "CheckPolicy":
        """Translate raw definition input into the matching policy."""

        normalized = value.strip().lower()
        for policy in CheckPolicy:
            if policy.value == normalized:
                return policy
        valid: Final[str] = ", ".join(p.value for p in CheckPolicy)
        msg = f"Unsupported check policy '{value}'. Valid options: {valid}"
        raise ValueError(msg)


@dataclass(slots=True, frozen=True)
class CopyFileAction:
    """Copy a backed-up file or directory to a live location."""

    tag: ClassVar[str] = "copy"

    destination: str
    exclude: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class ImportRegistryAction:
    """Import a ``.reg`` file, or every ``.reg`` file of a directory."""

    tag: ClassVar[str] = "import_registry"


@dataclass(slots=True, frozen=True)
class SetRegistryValuesAction:
    """Apply individual registry values described by a JSON document."""

    tag: ClassVar[str] = "set_registry"


@dataclass(slots=True, frozen=True)
class InvokeServiceAction:
    """Run an OS configuration utility against the backup artifact.

    ``{source}`` inside ``command`` is replaced by the artifact path.
    """

    tag: ClassVar[str] = "command"

    command: tuple[str, ...]
    timeout: float | None = None

    def render(self, source: Path) -> tuple[str, ...]:
        return tuple(part.replace("{source}", str(source)) for part in self.command)


RestoreAction = CopyFileAction | ImportRegistryAction | SetRegistryValuesAction | InvokeServiceAction


@dataclass(slots=True, frozen=True)
class RestoreItem:
    """A named unit of configuration inside a feature backup."""

    name: str
    source: str
    action: RestoreAction
    required: bool = False


@dataclass(slots=True, frozen=True)
class Check:
    """A read-only command whose output confirms a precondition."""

    name: str
    command: tuple[str, ...]
    expected_output: str | None = None
    policy: CheckPolicy = CheckPolicy.WARN


@dataclass(slots=True, frozen=True)
class FeatureDefinition:
    """Validated description of how one feature is restored."""

    name: str
    items: tuple[RestoreItem, ...]
    description: str = ""
    services: tuple[str, ...] = ()
    prerequisites: tuple[Check, ...] = ()
    verifications: tuple[Check, ...] = ()

    @property
    def item_names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.items)


@dataclass(slots=True, frozen=True)
class RestoreRequest:
    """Inputs required to restore a single feature."""

    feature: str
    backup_root: Path
    machine_name: str
    mode: ExecutionMode = ExecutionMode.LIVE
    machine_path: Path | None = None
    shared_path: Path | None = None
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    force: bool = False
    copy_exclude: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class RestoreResult:
    """Outcome of one feature restore; ``success`` holds iff there are no errors."""

    feature: str
    backup_path: Path | None
    mode: ExecutionMode
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())
    items_restored: tuple[str, ...] = ()
    items_skipped: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    planned_actions: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return not self.errors


__all__ = [
    "Check",
    "CheckPolicy",
    "CopyFileAction",
    "ExecutionMode",
    "FeatureDefinition",
    "ImportRegistryAction",
    "InvokeServiceAction",
    "RestoreAction",
    "RestoreItem",
    "RestoreRequest",
    "RestoreResult",
    "SetRegistryValuesAction",
]
