"""Summary: Execute the restore action of a single item.
Why: Dispatch on the typed action variants in one place, honouring dry runs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from logging import Logger
from pathlib import Path
from typing import final

from winrestore.platform.filesystem import UndefinedVariableError, expand_windows_path
from winrestore.platform.windows.process import pretty_command

from ..domain.errors import ItemRestoreError
from ..domain.models import (
    CopyFileAction,
    ExecutionMode,
    ImportRegistryAction,
    InvokeServiceAction,
    RestoreItem,
    SetRegistryValuesAction,
)
from ..domain.registry_document import load_registry_document
from .ports import CommandGateway, FileSystemGateway, RegistryGateway


@final
class ActionExecutor:
    """Apply one item's action, or describe it when running dry."""

    def __init__(
        self,
        *,
        filesystem: FileSystemGateway,
        registry: RegistryGateway,
        commands: CommandGateway,
        env: Mapping[str, str] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._filesystem = filesystem
        self._registry = registry
        self._commands = commands
        self._env = env
        self._logger = logger or logging.getLogger(__name__)

    def execute(
        self,
        item: RestoreItem,
        artifact: Path,
        mode: ExecutionMode,
        *,
        copy_exclude: Sequence[str] = (),
    ) -> str:
        """Run the action of ``item`` against ``artifact``.

        Returns:
            str: Human readable description of what was (or would be) done.

        Raises:
            ItemRestoreError: The action cannot be completed.
        """
        action = item.action
        if isinstance(action, CopyFileAction):
            return self._copy(action, artifact, mode, copy_exclude)
        if isinstance(action, ImportRegistryAction):
            return self._import_registry(artifact, mode)
        if isinstance(action, SetRegistryValuesAction):
            return self._set_registry_values(artifact, mode)
        if isinstance(action, InvokeServiceAction):
            return self._invoke(action, artifact, mode)
        raise ItemRestoreError(f"{item.name}: unsupported action {type(action).__name__}")

    def _copy(
        self,
        action: CopyFileAction,
        artifact: Path,
        mode: ExecutionMode,
        copy_exclude: Sequence[str],
    ) -> str:
        try:
            destination = expand_windows_path(action.destination, self._env)
        except UndefinedVariableError as e:
            raise ItemRestoreError(str(e)) from e

        description = f"copy {artifact} → {destination}"
        if mode.is_dry_run:
            return description

        written = self._filesystem.copy(
            artifact,
            destination,
            exclude=(*copy_exclude, *action.exclude),
        )
        self._logger.debug("Copied %d file(s) into %s", len(written), destination)
        return description

    def _import_registry(self, artifact: Path, mode: ExecutionMode) -> str:
        if self._filesystem.is_dir(artifact):
            reg_files = self._filesystem.list_files(artifact, "*.reg")
            if not reg_files:
                raise ItemRestoreError(f"No .reg files found in {artifact}")
        else:
            reg_files = [artifact]

        description = f"import {len(reg_files)} registry file(s) from {artifact}"
        if mode.is_dry_run:
            return description

        for reg_file in reg_files:
            self._logger.debug("Importing registry file %s", reg_file)
            self._registry.import_file(reg_file)
        return description

    def _set_registry_values(self, artifact: Path, mode: ExecutionMode) -> str:
        values = load_registry_document(artifact)
        description = f"set {len(values)} registry value(s) from {artifact}"
        if mode.is_dry_run:
            return description

        for value in values:
            self._logger.debug(
                "Setting %s\\%s (%s)", value.key, value.name or "(Default)", value.value_type
            )
            self._registry.set_value(value)
        return description

    def _invoke(self, action: InvokeServiceAction, artifact: Path, mode: ExecutionMode) -> str:
        argv = action.render(artifact)
        description = f"run {pretty_command(argv)}"
        if mode.is_dry_run:
            return description

        outcome = self._commands.run(argv, timeout=action.timeout)
        if not outcome.ok:
            raise ItemRestoreError(
                f"{argv[0]} exited with code {outcome.returncode}: {outcome.summary()}"
            )
        return description


__all__ = ["ActionExecutor"]
