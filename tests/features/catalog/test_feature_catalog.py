"""Tests for the feature catalog."""

from __future__ import annotations

from pathlib import Path

import pytest

from winrestore.features.catalog import FeatureCatalog, builtin_definitions
from winrestore.features.restoration.domain.errors import FeatureDefinitionError, UnknownFeatureError
from winrestore.features.restoration.domain.models import CheckPolicy, InvokeServiceAction

BUILTIN_FEATURES = [
    "Applications",
    "Browsers",
    "DefaultApps",
    "Keyboard",
    "Network",
    "Power",
    "RDP",
    "Sound",
    "SSH",
    "Terminal",
    "Word",
    "WSL",
]


def test_builtin_definitions_all_load() -> None:
    definitions = builtin_definitions()

    assert sorted((d.name for d in definitions), key=str.casefold) == BUILTIN_FEATURES
    assert all(definition.items for definition in definitions)


def test_builtin_wsl_requires_wsl_and_stops_lxss() -> None:
    wsl = FeatureCatalog.load().get("wsl")

    assert wsl.services == ("LxssManager",)
    assert wsl.prerequisites[0].policy is CheckPolicy.FAIL
    assert wsl.item_names == ("Registry", "WslConfig")


def test_builtin_power_imports_scheme_with_powercfg() -> None:
    power = FeatureCatalog.load().get("Power")
    scheme = next(item for item in power.items if item.name == "ActiveScheme")

    assert isinstance(scheme.action, InvokeServiceAction)
    assert scheme.action.command[0] == "powercfg"


def test_lookup_is_case_insensitive_and_unknown_names_fail() -> None:
    catalog = FeatureCatalog.load()

    assert "rdp" in catalog
    assert catalog.get(" Sound ").name == "Sound"
    assert len(catalog) == len(BUILTIN_FEATURES)
    assert [definition.name for definition in catalog] == BUILTIN_FEATURES
    with pytest.raises(UnknownFeatureError, match="Unknown feature 'Printers'"):
        _ = catalog.get("Printers")


def test_user_catalog_overrides_and_extends_builtins(tmp_path: Path) -> None:
    _ = (tmp_path / "sound.toml").write_text(
        'name = "sound"\n[[items]]\nname = "Only"\naction = "import_registry"\n',
        encoding="utf-8",
    )
    _ = (tmp_path / "fonts.toml").write_text(
        'name = "Fonts"\n[[items]]\nname = "Registry"\naction = "import_registry"\n',
        encoding="utf-8",
    )

    catalog = FeatureCatalog.load(tmp_path)

    assert catalog.get("Sound").item_names == ("Only",)
    assert "Fonts" in catalog
    assert len(catalog) == len(BUILTIN_FEATURES) + 1


def test_missing_user_catalog_directory_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(FeatureDefinitionError, match="catalog directory does not exist"):
        _ = FeatureCatalog.load(tmp_path / "missing")
