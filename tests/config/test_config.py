"""Test configuration management."""

import logging
from pathlib import Path

import pytest

from winrestore.config.config import DEFAULT_COPY_EXCLUDE_PATTERNS, Config
from winrestore.config.paths import default_config_path


def test_load_creates_default_file(portable_repo_root: Path) -> None:
    """A missing config file is written with commented defaults."""

    config = Config.load()

    config_file = portable_repo_root / "config" / "config.toml"
    assert default_config_path() == config_file
    assert config_file.exists()
    assert config.backup_root is None
    assert config.copy_exclude_patterns == list(DEFAULT_COPY_EXCLUDE_PATTERNS)
    assert "# winrestore configuration file" in config_file.read_text(encoding="utf-8")


def test_save_load_round_trip_keeps_windows_paths(portable_repo_root: Path) -> None:
    config_file = portable_repo_root / "custom.toml"
    original = Config(
        backup_root=Path("D:\\Backups\\Windows"),
        machine_name="WORKSTATION",
        catalog_dir=portable_repo_root / "features",
        copy_exclude_patterns=["*.tmp", 'quote"d'],
    )

    original.save(config_file)
    loaded = Config.load(config_file)

    assert loaded.backup_root == Path("D:\\Backups\\Windows")
    assert loaded.machine_name == "WORKSTATION"
    assert loaded.catalog_dir == portable_repo_root / "features"
    assert loaded.shared_backup_root is None
    assert loaded.copy_exclude_patterns == ["*.tmp", 'quote"d']


def test_load_is_cached_per_path(portable_repo_root: Path) -> None:
    config_file = portable_repo_root / "cached.toml"
    _ = config_file.write_text('machine_name = "A"\n', encoding="utf-8")

    first = Config.load(config_file)
    _ = config_file.write_text('machine_name = "B"\n', encoding="utf-8")

    assert Config.load(config_file) is first
    Config.reset()
    assert Config.load(config_file).machine_name == "B"


def test_unknown_keys_are_ignored_with_a_warning(
    portable_repo_root: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    config_file = portable_repo_root / "extra.toml"
    _ = config_file.write_text('machine_name = "A"\nlegacy = 1\n', encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="winrestore.config.config"):
        config = Config.load(config_file)

    assert config.machine_name == "A"
    assert "legacy" in caplog.text


def test_invalid_values_raise(portable_repo_root: Path) -> None:
    config_file = portable_repo_root / "bad.toml"
    _ = config_file.write_text("copy_exclude_patterns = [1, 2]\n", encoding="utf-8")

    with pytest.raises(ValueError, match="copy_exclude_patterns"):
        _ = Config.load(config_file)


def test_resolution_prefers_environment(portable_repo_root: Path, tmp_path: Path) -> None:
    config = Config(backup_root=tmp_path / "from-file", machine_name="FILE")

    assert config.resolved_backup_root({}) == tmp_path / "from-file"
    assert config.resolved_shared_root({}) == tmp_path / "from-file" / "shared"
    assert config.resolved_machine_name({"COMPUTERNAME": "HOST"}) == "FILE"

    env = {"WINRESTORE_BACKUP_ROOT": str(tmp_path / "from-env"), "WINRESTORE_MACHINE_NAME": "ENV"}
    assert config.resolved_backup_root(env) == tmp_path / "from-env"
    assert config.resolved_machine_name(env) == "ENV"


def test_blank_values_fall_back_to_defaults(portable_repo_root: Path) -> None:
    config = Config(backup_root="", machine_name="  ")  # type: ignore[arg-type]

    assert config.backup_root is None
    assert config.machine_name is None
    assert config.resolved_backup_root({}) == portable_repo_root / ".data" / "backups"
