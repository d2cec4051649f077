"""Tests for backup directory resolution."""

from __future__ import annotations

from pathlib import Path

from winrestore.features.restoration.adapters.filesystem.local import LocalFileSystemGateway
from winrestore.features.restoration.usecases.path_resolver import backup_candidates, resolve_backup_path


def test_candidates_list_machine_before_shared(tmp_path: Path) -> None:
    candidates = backup_candidates(feature_dir="RDP", backup_root=tmp_path, machine_name="PC1")

    assert candidates == [tmp_path / "PC1" / "RDP", tmp_path / "shared" / "RDP"]


def test_candidates_collapse_when_paths_coincide(tmp_path: Path) -> None:
    candidates = backup_candidates(
        feature_dir="RDP",
        backup_root=tmp_path,
        machine_name="PC1",
        machine_path=tmp_path / "same",
        shared_path=tmp_path / "same",
    )

    assert candidates == [tmp_path / "same" / "RDP"]


def test_resolve_prefers_machine_then_shared(tmp_path: Path) -> None:
    filesystem = LocalFileSystemGateway()
    shared = tmp_path / "shared" / "RDP"
    shared.mkdir(parents=True)

    assert resolve_backup_path(filesystem, feature_dir="RDP", backup_root=tmp_path, machine_name="PC1") == shared

    machine = tmp_path / "PC1" / "RDP"
    machine.mkdir(parents=True)

    assert resolve_backup_path(filesystem, feature_dir="RDP", backup_root=tmp_path, machine_name="PC1") == machine


def test_resolve_returns_none_when_nothing_exists(tmp_path: Path) -> None:
    filesystem = LocalFileSystemGateway()
    (tmp_path / "PC1").mkdir()
    _ = (tmp_path / "PC1" / "RDP").write_text("not a directory", encoding="utf-8")

    assert resolve_backup_path(filesystem, feature_dir="RDP", backup_root=tmp_path, machine_name="PC1") is None
