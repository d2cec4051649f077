"""Configuration management for winrestore."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from winrestore.config.file_ops import write_text_file
from winrestore.config.paths import (
    ENV_BACKUP_ROOT,
    ENV_MACHINE_NAME,
    default_backup_root,
    default_config_path,
    default_machine_name,
    default_shared_root,
)

logger = logging.getLogger(__name__)

# Temp and cache artefacts never copied back out of a backup.
DEFAULT_COPY_EXCLUDE_PATTERNS: Final[tuple[str, ...]] = (
    "*.tmp",
    "*.temp",
    "~$*",
    "Thumbs.db",
    "desktop.ini",
    "Cache",
    "cache",
    "Temp",
    "temp",
)


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Root directory containing one backup directory per machine
    backup_root: Path | None = _path_field()

    # Fallback location used when no machine-specific backup exists
    shared_backup_root: Path | None = _path_field()

    # Machine identity; falls back to COMPUTERNAME / the node name
    machine_name: str | None = None

    # Directory holding user feature definitions that override built-ins
    catalog_dir: Path | None = _path_field()

    # Log file path
    log_file: Path | None = _path_field()

    copy_exclude_patterns: list[str] = field(
        default_factory=lambda: list(DEFAULT_COPY_EXCLUDE_PATTERNS)
    )

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

        if not isinstance(self.copy_exclude_patterns, list) or not all(
            isinstance(pattern, str) for pattern in self.copy_exclude_patterns
        ):
            raise ValueError("copy_exclude_patterns must be a list of strings")

        if self.machine_name is not None and not self.machine_name.strip():
            self.machine_name = None

    def resolved_backup_root(self, env: Mapping[str, str] | None = None) -> Path:
        """Return the effective backup root (environment beats the file)."""

        if self.backup_root is not None and not _env_value(env, ENV_BACKUP_ROOT):
            return self.backup_root.resolve()
        return default_backup_root(env)

    def resolved_shared_root(self, env: Mapping[str, str] | None = None) -> Path:
        """Return the effective shared backup root."""

        if self.shared_backup_root is not None:
            return self.shared_backup_root.resolve()
        return default_shared_root(self.resolved_backup_root(env))

    def resolved_machine_name(self, env: Mapping[str, str] | None = None) -> str:
        """Return the machine identity used for backup lookups."""

        if self.machine_name and not _env_value(env, ENV_MACHINE_NAME):
            return self.machine_name
        return default_machine_name(env)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", target)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# winrestore configuration file")
        lines.append("")

        lines.append("# Root directory holding one backup directory per machine (optional)")
        lines.append('# Example: backup_root = "D:/Backups/Windows"')
        if config["backup_root"] is not None:
            lines.append(f"backup_root = {self._format_toml_value(config['backup_root'])}")
        lines.append("")

        lines.append("# Shared backup used when no machine-specific backup exists (optional)")
        lines.append("# Defaults to <backup_root>/shared")
        if config["shared_backup_root"] is not None:
            lines.append(
                f"shared_backup_root = {self._format_toml_value(config['shared_backup_root'])}"
            )
        lines.append("")

        lines.append("# Machine name used to locate machine-specific backups (optional)")
        lines.append("# Defaults to the COMPUTERNAME environment variable")
        if config["machine_name"]:
            lines.append(f"machine_name = {self._format_toml_value(config['machine_name'])}")
        lines.append("")

        lines.append("# Directory with feature definitions overriding the built-in ones (optional)")
        if config["catalog_dir"] is not None:
            lines.append(f"catalog_dir = {self._format_toml_value(config['catalog_dir'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "C:/Logs/winrestore.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Glob patterns skipped when copying directories out of a backup")
        lines.append(
            f"copy_exclude_patterns = {self._format_toml_value(config['copy_exclude_patterns'])}"
        )
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(self._format_toml_value(item) for item in value) + "]"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file, creating a default one when missing.

        Args:
            path: Explicit config file; defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.
        """
        config_file = path or default_config_path()

        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning(
                        "Ignoring unknown configuration keys in %s: %s",
                        config_file,
                        ", ".join(unknown),
                    )
                instance = cls(**{k: v for k, v in config_dict.items() if k in known})
                logger.debug("Configuration loaded from %s", config_file)
            else:
                instance = cls()
                instance.save(config_file)
                logger.info("Created default configuration at %s", config_file)

        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next ``load`` re-reads the file."""

        cls._instance = None
        cls._loaded_from = None


def _env_value(env: Mapping[str, str] | None, name: str) -> str:
    mapping = env if env is not None else os.environ
    return (mapping.get(name) or "").strip()


__all__ = ["Config", "DEFAULT_COPY_EXCLUDE_PATTERNS"]
