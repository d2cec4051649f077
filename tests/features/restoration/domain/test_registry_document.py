"""Tests for registry value documents."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from winrestore.features.restoration.domain.errors import ItemRestoreError, RegistryDocumentError
from winrestore.features.restoration.domain.registry_document import (
    RegistryValue,
    load_registry_document,
    normalize_key,
    parse_registry_document,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("HKCU:\\Software\\Microsoft", "HKCU\\Software\\Microsoft"),
        ("HKEY_LOCAL_MACHINE\\SYSTEM\\CurrentControlSet", "HKLM\\SYSTEM\\CurrentControlSet"),
        ("hklm/SOFTWARE/Policies/", "HKLM\\SOFTWARE\\Policies"),
        ("HKU", "HKU"),
    ],
)
def test_normalize_key(raw: str, expected: str) -> None:
    assert normalize_key(raw) == expected


def test_normalize_key_rejects_unknown_hive() -> None:
    with pytest.raises(RegistryDocumentError, match="Unsupported registry hive"):
        _ = normalize_key("HKXX\\Software")


def test_parse_registry_document_formats_each_value_type() -> None:
    values = parse_registry_document(
        {
            "HKCU:\\Control Panel\\Keyboard": {
                "KeyboardDelay": {"type": "REG_SZ", "data": "1"},
                "(Default)": {"type": "reg_sz", "data": "default"},
            },
            "HKLM\\SYSTEM\\CurrentControlSet\\Control\\Keyboard Layout": {
                "Scancode Map": {"type": "REG_BINARY", "data": [0, 0, 255]},
                "Flags": {"type": "REG_DWORD", "data": 3},
                "Layouts": {"type": "REG_MULTI_SZ", "data": ["a", "b"]},
                "Hex": {"type": "REG_BINARY", "data": "DE,AD BE EF"},
                "Marker": {"type": "REG_NONE"},
            },
        }
    )

    assert values[0] == RegistryValue("HKCU\\Control Panel\\Keyboard", "KeyboardDelay", "REG_SZ", "1")
    assert values[1].is_default
    assert values[1].value_type == "REG_SZ"
    by_name = {value.name: value for value in values[2:]}
    assert by_name["Scancode Map"].data == "0000ff"
    assert by_name["Flags"].data == "3"
    assert by_name["Layouts"].data == "a\\0b"
    assert by_name["Hex"].data == "deadbeef"
    assert by_name["Marker"].data == ""


@pytest.mark.parametrize(
    "declared",
    [
        {"type": "REG_DWORD", "data": "3"},
        {"type": "REG_DWORD", "data": True},
        {"type": "REG_DWORD", "data": 2**32},
        {"type": "REG_QWORD", "data": -1},
        {"type": "REG_MULTI_SZ", "data": "not-a-list"},
        {"type": "REG_BINARY", "data": "zz"},
        {"type": "REG_SZ", "data": 5},
        {"type": "REG_LINK", "data": "x"},
        {"data": "missing type"},
    ],
)
def test_parse_registry_document_rejects_invalid_values(declared: dict[str, object]) -> None:
    with pytest.raises(RegistryDocumentError):
        _ = parse_registry_document({"HKCU\\Software\\Test": {"Value": declared}})


def test_parse_registry_document_rejects_empty_document() -> None:
    with pytest.raises(RegistryDocumentError, match="non-empty"):
        _ = parse_registry_document({})


def test_registry_document_error_is_an_item_error() -> None:
    assert issubclass(RegistryDocumentError, ItemRestoreError)


def test_load_registry_document_accepts_bom(tmp_path: Path) -> None:
    document = tmp_path / "values.json"
    _ = document.write_text(
        json.dumps({"HKCU\\Software\\Test": {"Enabled": {"type": "REG_DWORD", "data": 1}}}),
        encoding="utf-8-sig",
    )

    values = load_registry_document(document)

    assert values == [RegistryValue("HKCU\\Software\\Test", "Enabled", "REG_DWORD", "1")]


def test_load_registry_document_reports_invalid_json(tmp_path: Path) -> None:
    document = tmp_path / "broken.json"
    _ = document.write_text("{not json", encoding="utf-8")

    with pytest.raises(RegistryDocumentError, match="broken.json: invalid JSON"):
        _ = load_registry_document(document)
