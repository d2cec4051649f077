"""Include/Exclude selection of the items a restore processes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def _fold(names: Iterable[str]) -> set[str]:
    return {name.strip().casefold() for name in names if name.strip()}


def select_items(
    candidates: Sequence[str],
    include: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> list[str]:
    """Return the candidate names to process, preserving candidate order.

    A non-empty ``include`` restricts the selection to those names; anything
    in ``exclude`` is removed afterwards. Matching ignores case.
    """

    wanted = _fold(include)
    unwanted = _fold(exclude)
    selected: list[str] = []
    for name in candidates:
        key = name.casefold()
        if wanted and key not in wanted:
            continue
        if key in unwanted:
            continue
        selected.append(name)
    return selected


def unknown_names(candidates: Sequence[str], requested: Iterable[str]) -> list[str]:
    """Return requested names that match no candidate."""

    known = _fold(candidates)
    return sorted({name for name in requested if name.strip() and name.strip().casefold() not in known})


__all__ = ["select_items", "unknown_names"]
