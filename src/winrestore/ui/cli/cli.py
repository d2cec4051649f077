"""Command line interface for winrestore."""

import sys
from collections.abc import Sequence
from typing import final

from winrestore.features.restoration import RestoreResult, WinRestoreError
from winrestore.platform.logging import logger
from winrestore.ui.cli.args import ArgumentParser
from winrestore.ui.cli.args.options import CLIArgs, ListArgs, RestoreArgs
from winrestore.ui.cli.commands import ListCommand, RestoreCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: Sequence[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, ListArgs):
                _ = ListCommand(args).execute()
                return

            assert isinstance(args, RestoreArgs)
            results = RestoreCommand(args).execute()
            if CommandProcessor._has_restore_failures(results):
                sys.exit(1)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except WinRestoreError as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)

    @staticmethod
    def _has_restore_failures(results: list[RestoreResult]) -> bool:
        """Determine whether any feature in the run did not restore cleanly."""

        return any(not result.success for result in results)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Note that underlying
        command processing may call ``sys.exit(...)`` on errors, so this
        return is only reached when processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0
