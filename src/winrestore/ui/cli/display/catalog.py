"""src/winrestore/ui/cli/display/catalog.py
Where: CLI adapter layer for catalog listings.
What: Render the known features, optionally with their items, as a Rich tree.
Why: Let users discover feature and item names before filtering a restore.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import final

from rich.console import Console
from rich.tree import Tree

from winrestore.features.restoration import FeatureDefinition


@final
class CatalogDisplay:
    """Handles feature catalog display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_features(self, definitions: Iterable[FeatureDefinition], *, show_items: bool = False) -> None:
        tree = Tree("[bold]Available features[/bold]")
        for definition in definitions:
            label = f"[bold cyan]{definition.name}[/bold cyan]"
            if definition.description:
                label += f" [dim]- {definition.description}[/dim]"
            node = tree.add(label)
            if not show_items:
                continue
            if definition.services:
                _ = node.add(f"[magenta]services:[/magenta] {', '.join(definition.services)}")
            for item in definition.items:
                marker = " [red](required)[/red]" if item.required else ""
                _ = node.add(f"{item.name} [dim]({item.action.tag} {item.source})[/dim]{marker}")
        self.console.print(tree)
