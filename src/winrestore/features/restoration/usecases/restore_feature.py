"""Use case orchestrating the restore of a single feature."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from logging import Logger
from pathlib import Path

from winrestore.platform.windows.process import CommandError

from ..domain.errors import BackupNotFoundError, ItemRestoreError, PrerequisiteError, RestoreAbortedError
from ..domain.filtering import select_items, unknown_names
from ..domain.models import (
    Check,
    CheckPolicy,
    ExecutionMode,
    FeatureDefinition,
    RestoreItem,
    RestoreRequest,
    RestoreResult,
)
from .action_executor import ActionExecutor
from .path_resolver import backup_candidates, resolve_backup_path
from .ports import CommandGateway, FileSystemGateway, RegistryGateway, ServiceGateway
from .service_lifecycle import ServiceLifecycle

CHECK_TIMEOUT_SECONDS = 60


@dataclass(slots=True)
class _ResultBuilder:
    """Mutable accumulator turned into an immutable result at the end."""

    feature: str
    backup_path: Path
    mode: ExecutionMode
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())
    restored: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    planned: list[str] = field(default_factory=list)

    def build(self) -> RestoreResult:
        return RestoreResult(
            feature=self.feature,
            backup_path=self.backup_path,
            mode=self.mode,
            timestamp=self.timestamp,
            items_restored=tuple(self.restored),
            items_skipped=tuple(self.skipped),
            errors=tuple(self.errors),
            planned_actions=tuple(self.planned),
        )


class RestorationService:
    """Coordinate path resolution, filtering, services and per-item restores."""

    _filesystem: FileSystemGateway
    _services: ServiceGateway
    _commands: CommandGateway
    _executor: ActionExecutor
    _logger: Logger

    def __init__(
        self,
        *,
        filesystem: FileSystemGateway,
        registry: RegistryGateway,
        services: ServiceGateway,
        commands: CommandGateway,
        env: Mapping[str, str] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._filesystem = filesystem
        self._services = services
        self._commands = commands
        self._logger = logger or logging.getLogger(__name__)
        self._executor = ActionExecutor(
            filesystem=filesystem,
            registry=registry,
            commands=commands,
            env=env,
            logger=self._logger,
        )

    def restore(self, definition: FeatureDefinition, request: RestoreRequest) -> RestoreResult:
        """Restore ``definition`` from its backup directory.

        Raises:
            BackupNotFoundError: No machine-specific or shared backup exists.
            PrerequisiteError: A prerequisite marked ``fail`` did not pass.
            RestoreAbortedError: An item failed and ``request.force`` is unset.
        """
        started = time.perf_counter()
        backup_path = self._locate_backup(definition, request)

        selected = self._select(definition, request)
        self._run_checks(definition, definition.prerequisites, stage="prerequisite")

        builder = _ResultBuilder(feature=definition.name, backup_path=backup_path, mode=request.mode)
        self._logger.info(
            "Restoring %s from %s",
            definition.name,
            backup_path,
            extra={
                "restore_event": "restore.feature.start",
                "feature": definition.name,
                "backup_path": str(backup_path),
                "total_items": len(selected),
                "dry_run": request.mode.is_dry_run,
            },
        )

        restorable = any(
            item.required or self._filesystem.exists(backup_path / item.source) for item in selected
        )
        services = definition.services if restorable else ()
        with ServiceLifecycle(self._services, services, request.mode, logger=self._logger):
            for item in selected:
                try:
                    self._restore_item(item, backup_path, request, builder)
                except Exception as exc:
                    message = str(exc) or exc.__class__.__name__
                    builder.errors.append(f"{item.name}: {message}")
                    builder.skipped.append(item.name)
                    self._logger.error(
                        "Failed to restore %s: %s",
                        item.name,
                        message,
                        extra={
                            "restore_event": "restore.item.failed",
                            "feature": definition.name,
                            "item": item.name,
                            "error_message": message,
                        },
                    )
                    if not request.force:
                        raise RestoreAbortedError(builder.build(), exc) from exc

        if not request.mode.is_dry_run and builder.restored:
            self._run_checks(definition, definition.verifications, stage="verification")

        result = builder.build()
        self._logger.info(
            "%s restore complete",
            definition.name,
            extra={
                "restore_event": "restore.feature.complete",
                "feature": definition.name,
                "restored": len(result.items_restored),
                "skipped": len(result.items_skipped),
                "failed": len(result.errors),
                "duration_seconds": time.perf_counter() - started,
            },
        )
        return result

    def _locate_backup(self, definition: FeatureDefinition, request: RestoreRequest) -> Path:
        backup_path = resolve_backup_path(
            self._filesystem,
            feature_dir=definition.name,
            backup_root=request.backup_root,
            machine_name=request.machine_name,
            machine_path=request.machine_path,
            shared_path=request.shared_path,
            logger=self._logger,
        )
        if backup_path is not None:
            return backup_path

        error = BackupNotFoundError(
            definition.name,
            backup_candidates(
                feature_dir=definition.name,
                backup_root=request.backup_root,
                machine_name=request.machine_name,
                machine_path=request.machine_path,
                shared_path=request.shared_path,
            ),
        )
        self._logger.error(
            "%s",
            error,
            extra={
                "restore_event": "restore.feature.error",
                "feature": definition.name,
                "error_message": "backup not found",
            },
        )
        raise error

    def _select(self, definition: FeatureDefinition, request: RestoreRequest) -> list[RestoreItem]:
        names = definition.item_names
        for label, requested in (("include", request.include), ("exclude", request.exclude)):
            unknown = unknown_names(names, requested)
            if unknown:
                self._logger.warning(
                    "%s has no item(s) named %s (%s filter ignored for them)",
                    definition.name,
                    ", ".join(unknown),
                    label,
                )
        chosen = set(select_items(names, request.include, request.exclude))
        return [item for item in definition.items if item.name in chosen]

    def _restore_item(
        self,
        item: RestoreItem,
        backup_path: Path,
        request: RestoreRequest,
        builder: _ResultBuilder,
    ) -> None:
        artifact = backup_path / item.source
        if not self._filesystem.exists(artifact):
            if item.required:
                raise ItemRestoreError(f"Backup artifact not found: {artifact}")
            builder.skipped.append(item.name)
            self._logger.info(
                "Skipping %s: no backup at %s",
                item.name,
                artifact,
                extra={
                    "restore_event": "restore.item.skipped",
                    "feature": builder.feature,
                    "item": item.name,
                    "reason": "not in backup",
                },
            )
            return

        description = self._executor.execute(
            item,
            artifact,
            request.mode,
            copy_exclude=request.copy_exclude,
        )
        if request.mode.is_dry_run:
            builder.planned.append(f"{item.name}: would {description}")
            self._logger.info(
                "Dry run: would %s",
                description,
                extra={
                    "restore_event": "restore.item.planned",
                    "feature": builder.feature,
                    "item": item.name,
                    "reason": description,
                },
            )
            return

        builder.restored.append(item.name)
        self._logger.info(
            "Restored %s (%s)",
            item.name,
            description,
            extra={
                "restore_event": "restore.item.restored",
                "feature": builder.feature,
                "item": item.name,
            },
        )

    def _run_checks(
        self,
        definition: FeatureDefinition,
        checks: tuple[Check, ...],
        *,
        stage: str,
    ) -> None:
        for check in checks:
            detail = self._evaluate_check(check)
            if detail is None:
                self._logger.debug("%s %s passed", stage.capitalize(), check.name)
                continue
            if stage == "prerequisite" and check.policy is CheckPolicy.FAIL:
                self._logger.error(
                    "Prerequisite %s failed: %s",
                    check.name,
                    detail,
                    extra={
                        "restore_event": "restore.feature.error",
                        "feature": definition.name,
                        "error_message": f"prerequisite '{check.name}' failed",
                    },
                )
                raise PrerequisiteError(definition.name, check.name, detail)
            self._logger.warning("%s %s did not pass: %s", stage.capitalize(), check.name, detail)

    def _evaluate_check(self, check: Check) -> str | None:
        """Return ``None`` when ``check`` passes, otherwise a reason."""

        try:
            outcome = self._commands.run(check.command, timeout=CHECK_TIMEOUT_SECONDS)
        except CommandError as exc:
            return str(exc)
        if not outcome.ok:
            return f"exit code {outcome.returncode}"
        if check.expected_output is not None and check.expected_output not in outcome.stdout:
            return f"expected output '{check.expected_output}' not found"
        return None


__all__ = ["RestorationService"]
