"""Restore command implementation for the CLI."""

from __future__ import annotations

from typing import final

from winrestore.application.services.restore_service import RestoreConfigService, RestoreServiceRequest
from winrestore.config.config import Config
from winrestore.features.restoration import RestoreResult
from winrestore.ui.cli.args.options import RestoreArgs
from winrestore.ui.cli.display.restore_result import RestoreResultDisplay


@final
class RestoreCommand:
    """Command that restores features from the backup store."""

    def __init__(
        self,
        args: RestoreArgs,
        service: RestoreConfigService | None = None,
        display: RestoreResultDisplay | None = None,
    ) -> None:
        self.args = args
        self.service = service or RestoreConfigService(config=Config.load())
        self.display = display or RestoreResultDisplay()

    def execute(self) -> list[RestoreResult]:
        """Execute the restore command."""

        request = RestoreServiceRequest(
            features=self.args.features,
            all_features=self.args.all_features,
            backup_root=self.args.backup_root,
            machine_name=self.args.machine_name,
            machine_path=self.args.machine_path,
            shared_path=self.args.shared_path,
            include=self.args.include,
            exclude=self.args.exclude,
            force=self.args.force,
            dry_run=self.args.dry_run,
        )
        results = self.service.run(request)
        self.display.show_results(results, quiet=self.args.quiet)
        return results
