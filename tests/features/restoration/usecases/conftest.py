"""Fixtures shared by restoration use case tests."""

from __future__ import annotations

import pytest
from restore_fakes import RecordingRegistry, RecordingServices, ScriptedCommands

from winrestore.features.restoration.adapters.filesystem.local import LocalFileSystemGateway


@pytest.fixture
def filesystem() -> LocalFileSystemGateway:
    return LocalFileSystemGateway()


@pytest.fixture
def registry() -> RecordingRegistry:
    return RecordingRegistry()


@pytest.fixture
def services() -> RecordingServices:
    return RecordingServices(running=["AudioEndpointBuilder", "Audiosrv"])


@pytest.fixture
def commands() -> ScriptedCommands:
    return ScriptedCommands()
