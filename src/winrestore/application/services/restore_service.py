"""Application service restoring one or many features from a backup store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from logging import Logger
from pathlib import Path
from typing import final

from winrestore.config.config import Config
from winrestore.features.catalog import FeatureCatalog
from winrestore.features.restoration import (
    BackupNotFoundError,
    ExecutionMode,
    FeatureDefinition,
    PrerequisiteError,
    RestorationService,
    RestoreAbortedError,
    RestoreRequest,
    RestoreResult,
)
from winrestore.features.restoration.adapters.filesystem.local import LocalFileSystemGateway
from winrestore.features.restoration.adapters.windows import NetServiceGateway, RegExeRegistryGateway
from winrestore.features.restoration.usecases.ports import (
    CommandGateway,
    FileSystemGateway,
    RegistryGateway,
    ServiceGateway,
)
from winrestore.platform.windows.process import SubprocessCommandRunner


@dataclass(slots=True)
class RestoreServiceRequest:
    """Parameters describing a restore run over one or more features."""

    features: tuple[str, ...] = ()
    all_features: bool = False
    backup_root: Path | None = None
    machine_name: str | None = None
    machine_path: Path | None = None
    shared_path: Path | None = None
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    force: bool = False
    dry_run: bool = False


@final
class RestoreConfigService:
    """Application façade wiring adapters into the restoration use case."""

    _config: Config
    _catalog: FeatureCatalog
    _service: RestorationService
    _env: Mapping[str, str] | None
    _logger: Logger

    def __init__(
        self,
        *,
        config: Config,
        catalog: FeatureCatalog | None = None,
        filesystem: FileSystemGateway | None = None,
        registry: RegistryGateway | None = None,
        services: ServiceGateway | None = None,
        commands: CommandGateway | None = None,
        env: Mapping[str, str] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._config = config
        self._env = env
        self._logger = logger or logging.getLogger(__name__)
        self._catalog = catalog or FeatureCatalog.load(config.catalog_dir, logger=self._logger)

        runner = SubprocessCommandRunner(logger=self._logger)
        self._service = RestorationService(
            filesystem=filesystem or LocalFileSystemGateway(),
            registry=registry or RegExeRegistryGateway(runner),
            services=services or NetServiceGateway(runner),
            commands=commands or runner,
            env=env,
            logger=self._logger,
        )

    @property
    def catalog(self) -> FeatureCatalog:
        return self._catalog

    def run(self, request: RestoreServiceRequest) -> list[RestoreResult]:
        """Restore the requested features sequentially.

        Missing backups and failed prerequisites yield an unsuccessful result for
        that feature and the run continues with the next one. An item failure
        without ``force`` stops the run after recording the partial result.

        Raises:
            UnknownFeatureError: A requested feature is not in the catalog.
        """
        definitions = self._definitions(request)
        mode = ExecutionMode.from_flag(request.dry_run)
        backup_root = (
            request.backup_root.resolve()
            if request.backup_root is not None
            else self._config.resolved_backup_root(self._env)
        )
        shared_path = request.shared_path
        if shared_path is None and self._config.shared_backup_root is not None:
            shared_path = self._config.resolved_shared_root(self._env)
        machine_name = request.machine_name or self._config.resolved_machine_name(self._env)

        results: list[RestoreResult] = []
        for definition in definitions:
            domain_request = RestoreRequest(
                feature=definition.name,
                backup_root=backup_root,
                machine_name=machine_name,
                mode=mode,
                machine_path=request.machine_path,
                shared_path=shared_path,
                include=request.include,
                exclude=request.exclude,
                force=request.force,
                copy_exclude=tuple(self._config.copy_exclude_patterns),
            )
            try:
                results.append(self._service.restore(definition, domain_request))
            except (BackupNotFoundError, PrerequisiteError) as exc:
                results.append(
                    RestoreResult(
                        feature=definition.name,
                        backup_path=None,
                        mode=mode,
                        errors=(str(exc),),
                    )
                )
            except RestoreAbortedError as exc:
                self._logger.error("%s", exc)
                results.append(exc.result)
                break
        return results

    def _definitions(self, request: RestoreServiceRequest) -> list[FeatureDefinition]:
        if request.all_features:
            return list(self._catalog)
        ordered: list[FeatureDefinition] = []
        seen: set[str] = set()
        for name in request.features:
            definition = self._catalog.get(name)
            if definition.name not in seen:
                seen.add(definition.name)
                ordered.append(definition)
        return ordered


__all__ = ["RestoreConfigService", "RestoreServiceRequest"]
