"""Collapse cursors that resolved to the same whitespace run."""

from __future__ import annotations

from typing import Iterable

from .models import CursorRegion


def deduplicate(
    regions: Iterable[CursorRegion],
) -> tuple[list[CursorRegion], list[CursorRegion]]:
    """Split ``regions`` into ``(kept, dropped)`` keyed by region start.

    Two cursors in the same run always find the same start, so the first
    one in order keeps the edit and later ones are dropped.
    """

    seen: set[tuple[int, int]] = set()
    kept: list[CursorRegion] = []
    dropped: list[CursorRegion] = []
    for entry in regions:
        key = entry.region.key
        if key in seen:
            dropped.append(entry)
            continue
        seen.add(key)
        kept.append(entry)
    return kept, dropped
