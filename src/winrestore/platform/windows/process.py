"""Subprocess wrapper used for every external Windows tool invocation."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from logging import Logger
from typing import final


class CommandError(RuntimeError):
    """Raised when an external command cannot be run or exits unsuccessfully."""

    def __init__(self, argv: Sequence[str], message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.argv = tuple(argv)
        self.returncode = returncode


@dataclass(slots=True, frozen=True)
class CommandOutcome:
    """Captured result of a finished command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def summary(self, limit: int = 300) -> str:
        """Return a single-line excerpt of the command output."""

        text = " ".join((self.stderr or self.stdout or "").split())
        return text if len(text) <= limit else text[: limit - 1] + "…"


def pretty_command(argv: Sequence[str]) -> str:
    return subprocess.list2cmdline(list(argv))


@final
class SubprocessCommandRunner:
    """Run commands through :mod:`subprocess` capturing text output."""

    _logger: Logger

    def __init__(self, *, logger: Logger | None = None, default_timeout: float | None = 300) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._default_timeout = default_timeout

    def run(
        self,
        argv: Sequence[str],
        *,
        timeout: float | None = None,
        check: bool = False,
    ) -> CommandOutcome:
        """Run ``argv`` and return its outcome.

        Args:
            argv: Program and arguments; never passed through a shell.
            timeout: Seconds before the process is killed; defaults to the runner default.
            check: Raise :class:`CommandError` on a non-zero exit code.

        Raises:
            CommandError: The program is missing, timed out, or failed with ``check``.
        """
        pretty = pretty_command(argv)
        self._logger.debug("Running: %s", pretty)

        try:
            completed = subprocess.run(
                list(argv),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout if timeout is not None else self._default_timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandError(argv, f"Command not found: {argv[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(argv, f"Command timed out after {e.timeout}s: {pretty}") from e
        except OSError as e:
            raise CommandError(argv, f"Command error: {pretty}: {e}") from e

        outcome = CommandOutcome(
            argv=tuple(argv),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        if not outcome.ok:
            self._logger.debug("Command exited with %s: %s", outcome.returncode, pretty)
            if check:
                raise CommandError(
                    argv,
                    f"{pretty} exited with code {outcome.returncode}: {outcome.summary()}",
                    returncode=outcome.returncode,
                )
        return outcome


__all__ = ["CommandError", "CommandOutcome", "SubprocessCommandRunner", "pretty_command"]
