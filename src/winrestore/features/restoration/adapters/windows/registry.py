"""Registry adapter driving ``reg.exe``."""

from __future__ import annotations

from pathlib import Path
from typing import final

from winrestore.platform.windows.process import SubprocessCommandRunner

from ...domain.registry_document import RegistryValue
from ...usecases.ports import RegistryGateway


@final
class RegExeRegistryGateway(RegistryGateway):
    """Import ``.reg`` files and write values with ``reg import`` / ``reg add``."""

    def __init__(self, runner: SubprocessCommandRunner, *, executable: str = "reg") -> None:
        self._runner = runner
        self._executable = executable

    def import_file(self, path: Path) -> None:
        _ = self._runner.run([self._executable, "import", str(path)], check=True)

    def set_value(self, value: RegistryValue) -> None:
        _ = self._runner.run(self.build_add_command(value), check=True)

    def build_add_command(self, value: RegistryValue) -> list[str]:
        """Return the ``reg add`` argv writing ``value``."""

        argv = [self._executable, "add", value.key]
        if value.is_default:
            argv.append("/ve")
        else:
            argv.extend(["/v", value.name])
        argv.extend(["/t", value.value_type])
        if value.value_type != "REG_NONE" or value.data:
            argv.extend(["/d", value.data])
        argv.append("/f")
        return argv


__all__ = ["RegExeRegistryGateway"]
