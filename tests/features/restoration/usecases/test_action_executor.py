"""Tests for per-item action dispatch."""

from __future__ import annotations

from pathlib import Path

import pytest
from restore_fakes import RecordingRegistry, ScriptedCommands

from winrestore.features.restoration.adapters.filesystem.local import LocalFileSystemGateway
from winrestore.features.restoration.domain.errors import ItemRestoreError, RegistryDocumentError
from winrestore.features.restoration.domain.models import (
    CopyFileAction,
    ExecutionMode,
    ImportRegistryAction,
    InvokeServiceAction,
    RestoreItem,
    SetRegistryValuesAction,
)
from winrestore.features.restoration.usecases.action_executor import ActionExecutor


@pytest.fixture
def executor(
    filesystem: LocalFileSystemGateway,
    registry: RecordingRegistry,
    commands: ScriptedCommands,
    tmp_path: Path,
) -> ActionExecutor:
    return ActionExecutor(
        filesystem=filesystem,
        registry=registry,
        commands=commands,
        env={"APPDATA": str(tmp_path / "AppData")},
    )


def test_copy_expands_environment_variables(executor: ActionExecutor, tmp_path: Path) -> None:
    artifact = tmp_path / "settings.json"
    _ = artifact.write_text("{}", encoding="utf-8")
    item = RestoreItem(
        name="Settings",
        source="settings.json",
        action=CopyFileAction(destination="$env:appdata/Terminal/settings.json"),
    )

    description = executor.execute(item, artifact, ExecutionMode.LIVE)

    target = tmp_path / "AppData" / "Terminal" / "settings.json"
    assert target.read_text(encoding="utf-8") == "{}"
    assert description == f"copy {artifact} → {target}"


def test_copy_merges_directories_and_honours_excludes(executor: ActionExecutor, tmp_path: Path) -> None:
    artifact = tmp_path / "Profile"
    (artifact / "Cache").mkdir(parents=True)
    _ = (artifact / "Cache" / "blob").write_text("x", encoding="utf-8")
    _ = (artifact / "prefs.ini").write_text("new", encoding="utf-8")
    _ = (artifact / "lock.tmp").write_text("x", encoding="utf-8")
    target = tmp_path / "AppData" / "Profile"
    target.mkdir(parents=True)
    _ = (target / "prefs.ini").write_text("old", encoding="utf-8")
    _ = (target / "keep.txt").write_text("keep", encoding="utf-8")
    item = RestoreItem(
        name="Profile",
        source="Profile",
        action=CopyFileAction(destination="%APPDATA%/Profile", exclude=("Cache",)),
    )

    _ = executor.execute(item, artifact, ExecutionMode.LIVE, copy_exclude=("*.tmp",))

    assert (target / "prefs.ini").read_text(encoding="utf-8") == "new"
    assert (target / "keep.txt").exists()
    assert not (target / "Cache").exists()
    assert not (target / "lock.tmp").exists()


def test_copy_with_undefined_variable_fails(executor: ActionExecutor, tmp_path: Path) -> None:
    item = RestoreItem(name="X", source="x", action=CopyFileAction(destination="%NOPE%/x"))

    with pytest.raises(ItemRestoreError, match="NOPE"):
        _ = executor.execute(item, tmp_path, ExecutionMode.DRY_RUN)


def test_import_registry_directory_imports_sorted_reg_files(
    executor: ActionExecutor,
    registry: RecordingRegistry,
    tmp_path: Path,
) -> None:
    artifact = tmp_path / "Registry"
    artifact.mkdir()
    for name in ("b.reg", "a.reg", "notes.txt"):
        _ = (artifact / name).write_text("", encoding="utf-8")
    item = RestoreItem(name="Registry", source="Registry", action=ImportRegistryAction())

    description = executor.execute(item, artifact, ExecutionMode.LIVE)

    assert registry.imported == [artifact / "a.reg", artifact / "b.reg"]
    assert description == f"import 2 registry file(s) from {artifact}"


def test_import_registry_empty_directory_fails(executor: ActionExecutor, tmp_path: Path) -> None:
    artifact = tmp_path / "Registry"
    artifact.mkdir()
    item = RestoreItem(name="Registry", source="Registry", action=ImportRegistryAction())

    with pytest.raises(ItemRestoreError, match="No .reg files"):
        _ = executor.execute(item, artifact, ExecutionMode.LIVE)


def test_set_registry_validates_document_even_when_dry(
    executor: ActionExecutor,
    registry: RecordingRegistry,
    tmp_path: Path,
) -> None:
    artifact = tmp_path / "values.json"
    _ = artifact.write_text('{"HKCU\\\\Software\\\\X": {"V": {"type": "REG_DWORD", "data": "1"}}}', encoding="utf-8")
    item = RestoreItem(name="Values", source="values.json", action=SetRegistryValuesAction())

    with pytest.raises(RegistryDocumentError):
        _ = executor.execute(item, artifact, ExecutionMode.DRY_RUN)
    assert registry.values == []


def test_dry_run_never_runs_commands(
    executor: ActionExecutor,
    commands: ScriptedCommands,
    tmp_path: Path,
) -> None:
    item = RestoreItem(
        name="Apps",
        source="apps.json",
        action=InvokeServiceAction(command=("winget", "import", "-i", "{source}")),
    )

    description = executor.execute(item, tmp_path / "apps.json", ExecutionMode.DRY_RUN)

    assert commands.calls == []
    assert description.startswith("run winget import -i ")
