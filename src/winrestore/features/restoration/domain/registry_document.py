"""Summary: Typed registry value documents consumed by ``set_registry`` items.
Why: Validate the whole document before the first value is written.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from .errors import RegistryDocumentError

REGISTRY_VALUE_TYPES: Final[frozenset[str]] = frozenset(
    {
        "REG_SZ",
        "REG_EXPAND_SZ",
        "REG_MULTI_SZ",
        "REG_DWORD",
        "REG_QWORD",
        "REG_BINARY",
        "REG_NONE",
    }
)
_INTEGER_LIMITS: Final[dict[str, int]] = {"REG_DWORD": 2**32 - 1, "REG_QWORD": 2**64 - 1}
_HIVE_ALIASES: Final[dict[str, str]] = {
    "HKEY_CURRENT_USER": "HKCU",
    "HKEY_LOCAL_MACHINE": "HKLM",
    "HKEY_CLASSES_ROOT": "HKCR",
    "HKEY_USERS": "HKU",
    "HKEY_CURRENT_CONFIG": "HKCC",
}


@dataclass(slots=True, frozen=True)
class RegistryValue:
    """One value to write with ``reg add``."""

    key: str
    name: str
    value_type: str
    data: str

    @property
    def is_default(self) -> bool:
        return self.name == ""


def normalize_key(raw_key: str) -> str:
    """Turn PowerShell-style keys (``HKCU:\\Software``) into ``reg.exe`` form."""

    key = raw_key.strip().replace("/", "\\")
    hive, sep, rest = key.partition("\\")
    hive = hive.rstrip(":").upper()
    hive = _HIVE_ALIASES.get(hive, hive)
    if hive not in _HIVE_ALIASES.values():
        raise RegistryDocumentError(f"Unsupported registry hive in key '{raw_key}'")
    rest = rest.strip("\\")
    return f"{hive}\\{rest}" if sep and rest else hive


def _format_data(key: str, name: str, value_type: str, data: Any) -> str:
    label = f"{key}\\{name or '(Default)'}"
    if value_type in _INTEGER_LIMITS:
        if isinstance(data, bool) or not isinstance(data, int):
            raise RegistryDocumentError(f"{label}: {value_type} data must be an integer")
        if not 0 <= data <= _INTEGER_LIMITS[value_type]:
            raise RegistryDocumentError(f"{label}: {value_type} data out of range")
        return str(data)
    if value_type == "REG_MULTI_SZ":
        if not isinstance(data, list) or not all(isinstance(part, str) for part in data):
            raise RegistryDocumentError(f"{label}: REG_MULTI_SZ data must be a list of strings")
        return "\\0".join(data)
    if value_type == "REG_BINARY":
        if isinstance(data, list) and all(isinstance(b, int) and 0 <= b <= 255 for b in data):
            return bytes(data).hex()
        if isinstance(data, str):
            compact = data.replace(",", "").replace(" ", "")
            try:
                _ = bytes.fromhex(compact)
            except ValueError as e:
                raise RegistryDocumentError(f"{label}: invalid hex data") from e
            return compact.lower()
        raise RegistryDocumentError(f"{label}: REG_BINARY data must be hex text or a byte list")
    if data is None and value_type == "REG_NONE":
        return ""
    if not isinstance(data, str):
        raise RegistryDocumentError(f"{label}: {value_type} data must be a string")
    return data


def parse_registry_document(document: Any) -> list[RegistryValue]:
    """Validate a ``{key: {value_name: {"type": ..., "data": ...}}}`` mapping.

    The value name ``""`` or ``"(Default)"`` addresses the key's default value.
    """

    if not isinstance(document, Mapping) or not document:
        raise RegistryDocumentError("Registry document must be a non-empty object of keys")

    values: list[RegistryValue] = []
    for raw_key, entries in document.items():
        key = normalize_key(str(raw_key))
        if not isinstance(entries, Mapping):
            raise RegistryDocumentError(f"{raw_key}: expected an object of values")
        for raw_name, declared in entries.items():
            name = "" if raw_name in ("", "(Default)") else str(raw_name)
            if not isinstance(declared, Mapping) or "type" not in declared:
                raise RegistryDocumentError(f"{raw_key}\\{raw_name}: missing 'type'")
            value_type = str(declared["type"]).upper()
            if value_type not in REGISTRY_VALUE_TYPES:
                raise RegistryDocumentError(
                    f"{raw_key}\\{raw_name}: unsupported value type '{declared['type']}'"
                )
            data = _format_data(key, name, value_type, declared.get("data"))
            values.append(RegistryValue(key=key, name=name, value_type=value_type, data=data))
    return values


def load_registry_document(path: Path) -> list[RegistryValue]:
    """Read and validate a registry values document from ``path``."""

    try:
        document = json.loads(path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as e:
        raise RegistryDocumentError(f"{path.name}: invalid JSON ({e.msg} at line {e.lineno})") from e
    return parse_registry_document(document)


__all__ = [
    "REGISTRY_VALUE_TYPES",
    "RegistryValue",
    "load_registry_document",
    "normalize_key",
    "parse_registry_document",
]
