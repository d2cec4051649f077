"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import final

from winrestore import __version__
from winrestore.config.config import Config
from winrestore.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from winrestore.ui.cli.args.options import CLIArgs, ListArgs, RestoreArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="winrestore",
            description="winrestore - restore Windows configuration from machine or shared backups.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

        subparsers = parser.add_subparsers(dest="command", required=True)

        restore_parser = subparsers.add_parser(
            "restore",
            help="Restore one or more features from the backup store",
        )
        _ = restore_parser.add_argument(
            "features",
            nargs="*",
            metavar="FEATURE",
            help="Features to restore (e.g. Sound RDP WSL)",
        )
        _ = restore_parser.add_argument(
            "--all",
            dest="all_features",
            action="store_true",
            help="Restore every feature in the catalog",
        )
        _ = restore_parser.add_argument(
            "--backup-root",
            type=str,
            metavar="PATH",
            help="Backup root containing one directory per machine",
        )
        _ = restore_parser.add_argument(
            "--machine-name",
            type=str,
            metavar="NAME",
            help="Machine whose backup to use (defaults to this computer)",
        )
        _ = restore_parser.add_argument(
            "--machine-path",
            type=str,
            metavar="PATH",
            help="Machine-specific backup directory (overrides BACKUP_ROOT/MACHINE_NAME)",
        )
        _ = restore_parser.add_argument(
            "--shared-path",
            type=str,
            metavar="PATH",
            help="Shared backup directory used when no machine backup exists",
        )
        _ = restore_parser.add_argument(
            "--include",
            action="append",
            default=[],
            metavar="ITEM",
            help="Restore only these items (repeatable or comma separated)",
        )
        _ = restore_parser.add_argument(
            "--exclude",
            action="append",
            default=[],
            metavar="ITEM",
            help="Skip these items (repeatable or comma separated)",
        )
        _ = restore_parser.add_argument(
            "--force",
            action="store_true",
            help="Continue with the remaining items when an item fails",
        )
        _ = restore_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would be restored without changing anything",
        )
        ArgumentParser._add_verbosity(restore_parser)

        list_parser = subparsers.add_parser(
            "list",
            help="List the features known to the catalog",
        )
        _ = list_parser.add_argument(
            "--items",
            dest="show_items",
            action="store_true",
            help="Also list the items of each feature",
        )
        ArgumentParser._add_verbosity(list_parser)

        return parser

    @staticmethod
    def _add_verbosity(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If arguments are inconsistent or paths don't exist.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        if parsed_args.command == "restore":
            return ArgumentParser._process_restore(parsed_args)

        if parsed_args.command == "list":
            return ListArgs(
                command="list",
                show_items=parsed_args.show_items,
                verbose=parsed_args.verbose,
                quiet=parsed_args.quiet,
            )

        logger.error("Unsupported command: %s", parsed_args.command)
        sys.exit(2)

    @staticmethod
    def _process_restore(parsed_args: argparse.Namespace) -> RestoreArgs:
        features = tuple(name.strip() for name in parsed_args.features if name.strip())
        if parsed_args.all_features and features:
            logger.error("Pass either feature names or --all, not both")
            sys.exit(2)
        if not parsed_args.all_features and not features:
            logger.error("Name at least one feature to restore, or pass --all")
            sys.exit(2)

        backup_root = ArgumentParser._existing_directory(parsed_args.backup_root, "Backup root")
        machine_path = ArgumentParser._existing_directory(parsed_args.machine_path, "Machine path")
        shared_path = ArgumentParser._existing_directory(parsed_args.shared_path, "Shared path")

        return RestoreArgs(
            command="restore",
            features=features,
            all_features=parsed_args.all_features,
            backup_root=backup_root,
            machine_name=parsed_args.machine_name,
            machine_path=machine_path,
            shared_path=shared_path,
            include=split_names(parsed_args.include),
            exclude=split_names(parsed_args.exclude),
            force=parsed_args.force,
            dry_run=parsed_args.dry_run,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )

    @staticmethod
    def _existing_directory(raw: str | None, label: str) -> Path | None:
        if not raw:
            return None
        path = Path(raw).expanduser()
        if not path.is_dir():
            logger.error("%s does not exist or is not a directory: %s", label, path)
            sys.exit(1)
        return path.resolve()


def split_names(values: Iterable[str]) -> tuple[str, ...]:
    """Flatten repeatable, comma separated name options."""

    names: list[str] = []
    for value in values:
        names.extend(part.strip() for part in value.split(",") if part.strip())
    return tuple(names)
