"""Feature catalog combining built-in and user supplied definitions."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from importlib.resources import files
from logging import Logger
from pathlib import Path
from typing import Final, final

from winrestore.features.restoration.domain.errors import FeatureDefinitionError, UnknownFeatureError
from winrestore.features.restoration.domain.models import FeatureDefinition

from ..adapters.toml_loader import load_definition_file, load_definition_resource

BUILTIN_PACKAGE: Final[str] = "winrestore.features.catalog"
DEFINITIONS_DIR: Final[str] = "definitions"


@final
class FeatureCatalog:
    """Case-insensitive lookup of feature definitions by name."""

    def __init__(self, definitions: Iterable[FeatureDefinition]) -> None:
        self._definitions: dict[str, FeatureDefinition] = {}
        for definition in definitions:
            self._definitions[definition.name.casefold()] = definition

    @classmethod
    def load(cls, catalog_dir: Path | None = None, *, logger: Logger | None = None) -> "FeatureCatalog":
        """Load built-in definitions, then let ``catalog_dir`` override them by name."""

        log = logger or logging.getLogger(__name__)
        definitions: dict[str, FeatureDefinition] = {}

        for definition in builtin_definitions():
            definitions[definition.name.casefold()] = definition

        if catalog_dir is not None:
            if not catalog_dir.is_dir():
                raise FeatureDefinitionError(catalog_dir, "catalog directory does not exist")
            for path in sorted(catalog_dir.glob("*.toml")):
                definition = load_definition_file(path)
                key = definition.name.casefold()
                if key in definitions:
                    log.debug("Definition %s overrides built-in %s", path, definition.name)
                definitions[key] = definition

        return cls(definitions.values())

    def get(self, name: str) -> FeatureDefinition:
        """Return the definition called ``name``.

        Raises:
            UnknownFeatureError: No feature with that name exists.
        """
        try:
            return self._definitions[name.strip().casefold()]
        except KeyError:
            raise UnknownFeatureError(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted((d.name for d in self._definitions.values()), key=str.casefold)

    def __iter__(self) -> Iterator[FeatureDefinition]:
        for name in self.names():
            yield self._definitions[name.casefold()]

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().casefold() in self._definitions


def builtin_definitions() -> list[FeatureDefinition]:
    """Load the definitions shipped with the package."""

    root = files(BUILTIN_PACKAGE).joinpath(DEFINITIONS_DIR)
    resources = sorted(
        (entry for entry in root.iterdir() if entry.name.endswith(".toml")),
        key=lambda entry: entry.name,
    )
    return [load_definition_resource(resource) for resource in resources]


__all__ = ["FeatureCatalog", "builtin_definitions"]
