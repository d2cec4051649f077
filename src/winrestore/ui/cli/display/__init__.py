"""Display management for CLI interface."""

from winrestore.ui.cli.display.catalog import CatalogDisplay
from winrestore.ui.cli.display.restore_result import RestoreResultDisplay

__all__ = ["CatalogDisplay", "RestoreResultDisplay"]
