"""Best-effort stop/restart of OS services around a restore."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from logging import Logger
from types import TracebackType
from typing import final

from ..domain.models import ExecutionMode
from .ports import ServiceGateway


@final
class ServiceLifecycle:
    """Context manager stopping services on entry and restarting them on exit.

    Only services that were actually stopped are restarted, in reverse order,
    and they are restarted even when the restore body raised. Service failures
    are logged and never propagate.
    """

    def __init__(
        self,
        gateway: ServiceGateway,
        services: Sequence[str],
        mode: ExecutionMode,
        *,
        logger: Logger | None = None,
    ) -> None:
        self._gateway = gateway
        self._services = tuple(services)
        self._mode = mode
        self._logger = logger or logging.getLogger(__name__)
        self._stopped: list[str] = []

    @property
    def stopped(self) -> tuple[str, ...]:
        return tuple(self._stopped)

    def __enter__(self) -> "ServiceLifecycle":
        for name in self._services:
            if self._mode.is_dry_run:
                self._logger.info("Dry run: would stop service %s", name)
                continue
            self._logger.info(
                "Stopping service %s",
                name,
                extra={"restore_event": "restore.service.stop", "service": name},
            )
            try:
                if self._gateway.stop(name):
                    self._stopped.append(name)
            except Exception as exc:
                self._logger.warning("Could not stop service %s: %s", name, exc)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if self._mode.is_dry_run:
            for name in reversed(self._services):
                self._logger.info("Dry run: would start service %s", name)
            return False

        while self._stopped:
            name = self._stopped.pop()
            self._logger.info(
                "Starting service %s",
                name,
                extra={"restore_event": "restore.service.start", "service": name},
            )
            try:
                self._gateway.start(name)
            except Exception as exc_start:
                self._logger.warning("Could not start service %s: %s", name, exc_start)
        return False


__all__ = ["ServiceLifecycle"]
