"""List command implementation for the CLI."""

from __future__ import annotations

from typing import final

from winrestore.config.config import Config
from winrestore.features.catalog import FeatureCatalog
from winrestore.platform.logging import logger
from winrestore.ui.cli.args.options import ListArgs
from winrestore.ui.cli.display.catalog import CatalogDisplay


@final
class ListCommand:
    """Command that prints the feature catalog."""

    def __init__(
        self,
        args: ListArgs,
        catalog: FeatureCatalog | None = None,
        display: CatalogDisplay | None = None,
    ) -> None:
        self.args = args
        self.catalog = catalog or FeatureCatalog.load(Config.load().catalog_dir, logger=logger)
        self.display = display or CatalogDisplay()

    def execute(self) -> list[str]:
        """Print the catalog and return the feature names."""

        if not self.args.quiet:
            self.display.show_features(self.catalog, show_items=self.args.show_items)
        return self.catalog.names()
