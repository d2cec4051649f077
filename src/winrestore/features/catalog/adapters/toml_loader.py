"""Summary: Parse TOML feature definitions into validated typed structs.
Why: String action tags are resolved once, at load time, never during restores.
"""

from __future__ import annotations

import tomllib
from collections.abc import Callable, Mapping
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any, Final

from winrestore.features.restoration.domain.errors import FeatureDefinitionError
from winrestore.features.restoration.domain.models import (
    Check,
    CheckPolicy,
    CopyFileAction,
    FeatureDefinition,
    ImportRegistryAction,
    InvokeServiceAction,
    RestoreAction,
    RestoreItem,
    SetRegistryValuesAction,
)

_FEATURE_KEYS: Final[frozenset[str]] = frozenset(
    {"name", "description", "services", "items", "prerequisites", "verifications"}
)
_ITEM_COMMON_KEYS: Final[frozenset[str]] = frozenset({"name", "source", "action", "required"})
_ACTION_KEYS: Final[dict[str, frozenset[str]]] = {
    "copy": frozenset({"destination", "exclude"}),
    "import_registry": frozenset(),
    "set_registry": frozenset(),
    "command": frozenset({"command", "timeout"}),
}
_CHECK_KEYS: Final[frozenset[str]] = frozenset({"name", "command", "expected_output", "on_failure"})


class _Reader:
    """Field accessors that report the offending file and location."""

    def __init__(self, source: Path | str) -> None:
        self.source = source

    def fail(self, where: str, message: str) -> FeatureDefinitionError:
        return FeatureDefinitionError(self.source, f"{where}: {message}")

    def table(self, value: Any, where: str) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            raise self.fail(where, "expected a table")
        return value

    def string(self, table: Mapping[str, Any], key: str, where: str, *, default: str | None = None) -> str:
        value = table.get(key, default)
        if not isinstance(value, str) or not value.strip():
            raise self.fail(where, f"'{key}' must be a non-empty string")
        return value.strip()

    def string_list(self, table: Mapping[str, Any], key: str, where: str) -> tuple[str, ...]:
        value = table.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, str) and v.strip() for v in value):
            raise self.fail(where, f"'{key}' must be a list of non-empty strings")
        return tuple(v.strip() for v in value)

    def reject_unknown(self, table: Mapping[str, Any], allowed: frozenset[str], where: str) -> None:
        unknown = sorted(set(table) - allowed)
        if unknown:
            raise self.fail(where, f"unknown key(s): {', '.join(unknown)}")


def _parse_action(reader: _Reader, table: Mapping[str, Any], where: str) -> RestoreAction:
    tag = reader.string(table, "action", where).lower()
    if tag not in _ACTION_KEYS:
        valid = ", ".join(sorted(_ACTION_KEYS))
        raise reader.fail(where, f"unsupported action '{tag}' (valid: {valid})")
    reader.reject_unknown(table, _ITEM_COMMON_KEYS | _ACTION_KEYS[tag], where)

    if tag == "copy":
        return CopyFileAction(
            destination=reader.string(table, "destination", where),
            exclude=reader.string_list(table, "exclude", where),
        )
    if tag == "import_registry":
        return ImportRegistryAction()
    if tag == "set_registry":
        return SetRegistryValuesAction()

    command = reader.string_list(table, "command", where)
    if not command:
        raise reader.fail(where, "'command' must not be empty")
    timeout = table.get("timeout")
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0):
        raise reader.fail(where, "'timeout' must be a positive number of seconds")
    return InvokeServiceAction(command=command, timeout=float(timeout) if timeout is not None else None)


def _parse_item(reader: _Reader, raw: Any, index: int) -> RestoreItem:
    where = f"items[{index}]"
    table = reader.table(raw, where)
    name = reader.string(table, "name", where)
    where = f"item '{name}'"
    source = reader.string(table, "source", where, default=name)
    if Path(source).is_absolute() or ".." in Path(source).parts:
        raise reader.fail(where, "'source' must be a path relative to the feature backup")
    required = table.get("required", False)
    if not isinstance(required, bool):
        raise reader.fail(where, "'required' must be true or false")
    return RestoreItem(
        name=name,
        source=source,
        action=_parse_action(reader, table, where),
        required=required,
    )


def _parse_check(reader: _Reader, raw: Any, where: str) -> Check:
    table = reader.table(raw, where)
    reader.reject_unknown(table, _CHECK_KEYS, where)
    name = reader.string(table, "name", where)
    command = reader.string_list(table, "command", f"{where} '{name}'")
    if not command:
        raise reader.fail(where, "'command' must not be empty")
    expected = table.get("expected_output")
    if expected is not None and not isinstance(expected, str):
        raise reader.fail(where, "'expected_output' must be a string")
    try:
        policy = CheckPolicy.from_user_input(str(table.get("on_failure", "warn")))
    except ValueError as e:
        raise reader.fail(where, str(e)) from e
    return Check(name=name, command=command, expected_output=expected, policy=policy)


def parse_feature_definition(data: Mapping[str, Any], source: Path | str) -> FeatureDefinition:
    """Validate a decoded TOML document and build a :class:`FeatureDefinition`.

    Raises:
        FeatureDefinitionError: A field is missing, has the wrong type, or is unknown.
    """
    reader = _Reader(source)
    reader.reject_unknown(data, _FEATURE_KEYS, "feature")
    name = reader.string(data, "name", "feature")

    raw_items = data.get("items")
    if not isinstance(raw_items, list) or not raw_items:
        raise reader.fail(name, "at least one [[items]] entry is required")
    items = tuple(_parse_item(reader, raw, index) for index, raw in enumerate(raw_items))

    seen: set[str] = set()
    for item in items:
        key = item.name.casefold()
        if key in seen:
            raise reader.fail(name, f"duplicate item name '{item.name}'")
        seen.add(key)

    def _checks(key: str) -> tuple[Check, ...]:
        raw_checks = data.get(key, [])
        if not isinstance(raw_checks, list):
            raise reader.fail(name, f"'{key}' must be an array of tables")
        return tuple(_parse_check(reader, raw, f"{key}[{i}]") for i, raw in enumerate(raw_checks))

    description = data.get("description", "")
    if not isinstance(description, str):
        raise reader.fail(name, "'description' must be a string")

    return FeatureDefinition(
        name=name,
        description=description.strip(),
        items=items,
        services=reader.string_list(data, "services", name),
        prerequisites=_checks("prerequisites"),
        verifications=_checks("verifications"),
    )


def _load(source: Path | str, read: Callable[[], str]) -> FeatureDefinition:
    try:
        data = tomllib.loads(read())
    except tomllib.TOMLDecodeError as e:
        raise FeatureDefinitionError(source, f"invalid TOML ({e})") from e
    except OSError as e:
        raise FeatureDefinitionError(source, f"cannot read definition ({e})") from e
    return parse_feature_definition(data, source)


def load_definition_file(path: Path) -> FeatureDefinition:
    """Load a feature definition from a TOML file on disk."""

    return _load(path, lambda: path.read_text(encoding="utf-8"))


def load_definition_resource(resource: Traversable) -> FeatureDefinition:
    """Load a feature definition shipped as package data."""

    return _load(resource.name, lambda: resource.read_text(encoding="utf-8"))


__all__ = ["load_definition_file", "load_definition_resource", "parse_feature_definition"]
