"""Display utilities for restore command results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console

from winrestore.features.restoration import RestoreResult


@final
class RestoreResultDisplay:
    """Render restoration outcomes in the CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_results(self, results: Sequence[RestoreResult], *, quiet: bool = False) -> None:
        """Print one block per feature followed by a batch summary."""

        if quiet:
            return

        for result in results:
            self._show_feature(result)

        succeeded = sum(1 for result in results if result.success)
        failed = len(results) - succeeded
        dry_run = any(result.mode.is_dry_run for result in results)

        header = "Restore Summary (dry run)" if dry_run else "Restore Summary"
        self.console.print(f"\n[bold]{header}:[/bold]")
        self.console.print(f"Features processed: {len(results)}")
        self.console.print(f"[green]Succeeded: {succeeded}[/green]")
        if failed:
            self.console.print(f"[red]Failed: {failed}[/red]")

    def _show_feature(self, result: RestoreResult) -> None:
        status = "[green]OK[/green]" if result.success else "[red]FAILED[/red]"
        self.console.print(f"\n[bold cyan]{result.feature}[/bold cyan] {status}")
        if result.backup_path is not None:
            self.console.print(f"  Backup: [dim]{result.backup_path}[/dim]")

        if result.planned_actions:
            self.console.print("  [yellow]Planned:[/yellow]")
            for action in result.planned_actions:
                self.console.print(f"    • {action}")
        if result.items_restored:
            self.console.print(f"  [green]Restored:[/green] {', '.join(result.items_restored)}")
        if result.items_skipped:
            self.console.print(f"  [yellow]Skipped:[/yellow] {', '.join(result.items_skipped)}")
        for error in result.errors:
            self.console.print(f"[red]  • {error}[/red]")
