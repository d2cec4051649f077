"""Tests for the reg.exe and net.exe adapters."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from winrestore.features.restoration.adapters.windows import NetServiceGateway, RegExeRegistryGateway
from winrestore.features.restoration.domain.registry_document import RegistryValue
from winrestore.platform.windows.process import CommandError, CommandOutcome, SubprocessCommandRunner


@pytest.fixture
def runner(mocker: MockerFixture) -> MagicMock:
    return mocker.create_autospec(SubprocessCommandRunner, instance=True)


def _outcome(returncode: int, stderr: str = "") -> CommandOutcome:
    return CommandOutcome(argv=("net",), returncode=returncode, stderr=stderr)


def test_reg_import_checks_exit_code(runner: MagicMock) -> None:
    gateway = RegExeRegistryGateway(runner)

    gateway.import_file(Path("audio.reg"))

    runner.run.assert_called_once_with(["reg", "import", "audio.reg"], check=True)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (
            RegistryValue("HKCU\\Control Panel\\Keyboard", "KeyboardDelay", "REG_SZ", "1"),
            ["reg", "add", "HKCU\\Control Panel\\Keyboard", "/v", "KeyboardDelay", "/t", "REG_SZ", "/d", "1", "/f"],
        ),
        (
            RegistryValue("HKCU\\Software\\X", "", "REG_SZ", "default"),
            ["reg", "add", "HKCU\\Software\\X", "/ve", "/t", "REG_SZ", "/d", "default", "/f"],
        ),
        (
            RegistryValue("HKCU\\Software\\X", "Marker", "REG_NONE", ""),
            ["reg", "add", "HKCU\\Software\\X", "/v", "Marker", "/t", "REG_NONE", "/f"],
        ),
    ],
)
def test_reg_add_command(runner: MagicMock, value: RegistryValue, expected: list[str]) -> None:
    gateway = RegExeRegistryGateway(runner)

    assert gateway.build_add_command(value) == expected

    gateway.set_value(value)
    runner.run.assert_called_once_with(expected, check=True)


def test_net_stop_reports_whether_service_was_running(runner: MagicMock) -> None:
    gateway = NetServiceGateway(runner)

    runner.run.return_value = _outcome(0)
    assert gateway.stop("Audiosrv") is True
    runner.run.assert_called_with(["net", "stop", "Audiosrv", "/y"])

    runner.run.return_value = _outcome(2)
    assert gateway.stop("Audiosrv") is False


def test_net_stop_raises_on_other_failures(runner: MagicMock) -> None:
    runner.run.return_value = _outcome(5, stderr="Access is denied.")

    with pytest.raises(CommandError, match="Access is denied") as excinfo:
        _ = NetServiceGateway(runner).stop("TermService")

    assert excinfo.value.returncode == 5


def test_net_start_tolerates_already_started(runner: MagicMock) -> None:
    gateway = NetServiceGateway(runner)

    runner.run.return_value = _outcome(2)
    gateway.start("Audiosrv")
    runner.run.assert_called_with(["net", "start", "Audiosrv"])

    runner.run.return_value = _outcome(1)
    with pytest.raises(CommandError):
        gateway.start("Audiosrv")
