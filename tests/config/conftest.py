"""Shared pytest fixtures for configuration-focused tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary repository root for portable path detection."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    import winrestore.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    for variable in ("WINRESTORE_CONFIG", "WINRESTORE_DATA_DIR", "WINRESTORE_BACKUP_ROOT", "WINRESTORE_MACHINE_NAME"):
        monkeypatch.delenv(variable, raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Reset the cached configuration around each test."""

    from winrestore.config.config import Config

    Config.reset()
    try:
        yield None
    finally:
        Config.reset()
