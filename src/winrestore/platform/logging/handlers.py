"""Rich console handler for restore events.

Where: platform/logging/handlers.py
What: Render structured restore log records with icons, colours and compact paths.
Why: Keep presentation of log events out of the restore use cases.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class RestoreEventRichHandler(RichHandler):
    """Rich handler that renders ``restore_event`` records and white paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "restore.feature.start": ("🚀", "cyan"),
        "restore.feature.complete": ("✅", "green"),
        "restore.feature.error": ("❌", "red"),
        "restore.item.restored": ("📦", "green"),
        "restore.item.planned": ("📝", "blue"),
        "restore.item.skipped": ("↪️", "yellow"),
        "restore.item.failed": ("⛔", "red"),
        "restore.service.stop": ("⏸️", "magenta"),
        "restore.service.start": ("▶️", "magenta"),
    }
    _ITEM_PREFIXES: ClassVar[dict[str, str]] = {
        "restore.item.restored": "Restored ",
        "restore.item.planned": "Would restore ",
        "restore.item.skipped": "Skipped ",
        "restore.item.failed": "Failed ",
        "restore.service.stop": "Stopping service ",
        "restore.service.start": "Starting service ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Format a path with coloured separators and leading-segment truncation."""

        pure_path = self._to_pure_path(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        body_parts = [part for part in pure_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display = anchor.rstrip("\\/") if anchor else ""
        if anchor:
            display += separator
        if truncated:
            display += "…" + separator
        display += separator.join(body_parts)
        return self._style_path_string(display or ".", separator)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path or (len(raw_path) > 1 and raw_path[1] == ":"):
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _style_path_string(path_string: str, separator: str) -> Text:
        text = Text()
        separator_chars = {separator, "/"}
        for char in path_string:
            if char in separator_chars or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_restore_event(self, record: logging.LogRecord) -> Text | None:
        """Render structured restore events with dedicated styling."""

        event = getattr(record, "restore_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        feature = getattr(record, "feature", None)
        if event.startswith("restore.feature"):
            if event == "restore.feature.start":
                _ = body.append(f"Restoring {feature}")
                details: list[str] = []
                total_items = getattr(record, "total_items", None)
                if isinstance(total_items, int):
                    details.append(f"items={total_items}")
                if getattr(record, "dry_run", False):
                    details.append("dry-run")
                if details:
                    _ = body.append(" [" + ", ".join(details) + "]")
                backup_path = getattr(record, "backup_path", None)
                if backup_path:
                    _ = body.append(" from ")
                    _ = body.append_text(self._format_path(str(backup_path)))
            elif event == "restore.feature.complete":
                _ = body.append(f"{feature} complete")
                metrics: list[str] = []
                for label in ("restored", "skipped", "failed"):
                    value = getattr(record, label, None)
                    if isinstance(value, int):
                        metrics.append(f"{label}={value}")
                duration = getattr(record, "duration_seconds", None)
                if isinstance(duration, (int, float)):
                    metrics.append(f"duration={duration:.2f}s")
                if metrics:
                    _ = body.append(" [" + ", ".join(metrics) + "]")
            else:
                _ = body.append(f"{feature} failed")
                error = getattr(record, "error_message", None)
                if error:
                    _ = body.append(f" ({error})")
        else:
            _ = body.append(self._ITEM_PREFIXES.get(event, ""))
            _ = body.append(str(getattr(record, "item", None) or getattr(record, "service", "")))
            target = getattr(record, "target", None)
            if target:
                _ = body.append(" → ")
                _ = body.append_text(self._format_path(str(target)))
            detail = getattr(record, "error_message", None) or getattr(record, "reason", None)
            if detail:
                _ = body.append(f" ({detail})")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for restore events."""

        event_text = self._render_restore_event(record)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["RestoreEventRichHandler"]
