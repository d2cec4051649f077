"""Tests for include/exclude item selection."""

from __future__ import annotations

from winrestore.features.restoration.domain.filtering import select_items, unknown_names

CANDIDATES = ["Registry", "Config", "Profiles"]


def test_select_items_without_filters_keeps_everything() -> None:
    assert select_items(CANDIDATES) == CANDIDATES


def test_select_items_include_restricts_selection() -> None:
    assert select_items(CANDIDATES, include=["Registry"]) == ["Registry"]


def test_select_items_exclude_removes_names() -> None:
    assert select_items(CANDIDATES, exclude=["Config"]) == ["Registry", "Profiles"]


def test_select_items_applies_exclude_after_include() -> None:
    selected = select_items(CANDIDATES, include=["Registry", "Config"], exclude=["Config"])
    assert selected == ["Registry"]


def test_select_items_matches_case_insensitively_and_preserves_order() -> None:
    selected = select_items(CANDIDATES, include=["profiles", " REGISTRY "])
    assert selected == ["Registry", "Profiles"]


def test_select_items_include_of_unknown_names_selects_nothing() -> None:
    assert select_items(CANDIDATES, include=["Missing"]) == []


def test_unknown_names_reports_requested_names_without_candidate() -> None:
    assert unknown_names(CANDIDATES, ["config", "Bogus", "", "Another"]) == ["Another", "Bogus"]
