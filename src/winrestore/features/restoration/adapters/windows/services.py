"""Service adapter driving ``net.exe``."""

from __future__ import annotations

from typing import Final, final

from winrestore.platform.windows.process import CommandError, SubprocessCommandRunner

from ...usecases.ports import ServiceGateway

# net.exe exits with 2 when the service is already in the requested state.
NET_ALREADY_IN_STATE: Final[int] = 2


@final
class NetServiceGateway(ServiceGateway):
    """Stop and start Windows services with ``net stop`` / ``net start``."""

    def __init__(self, runner: SubprocessCommandRunner, *, executable: str = "net") -> None:
        self._runner = runner
        self._executable = executable

    def stop(self, name: str) -> bool:
        argv = [self._executable, "stop", name, "/y"]
        outcome = self._runner.run(argv)
        if outcome.ok:
            return True
        if outcome.returncode == NET_ALREADY_IN_STATE:
            return False
        raise CommandError(
            argv,
            f"net stop {name} exited with code {outcome.returncode}: {outcome.summary()}",
            returncode=outcome.returncode,
        )

    def start(self, name: str) -> None:
        argv = [self._executable, "start", name]
        outcome = self._runner.run(argv)
        if outcome.ok or outcome.returncode == NET_ALREADY_IN_STATE:
            return
        raise CommandError(
            argv,
            f"net start {name} exited with code {outcome.returncode}: {outcome.summary()}",
            returncode=outcome.returncode,
        )


__all__ = ["NetServiceGateway"]
