"""Decide what a whitespace run becomes."""

from __future__ import annotations

from .models import SINGLE_SPACE, CursorRegion, Edit


def choose_replacement(entry: CursorRegion) -> str:
    """Return ``""`` for runs at either edge of the line, else one space.

    A run is at an edge when the cursor is at column 0 or the line end, or
    when erasing it leaves nothing but the cursor on that side.
    """

    if (
        entry.at_line_start
        or entry.at_line_end
        or entry.prefix_fully_erased
        or entry.suffix_fully_erased
    ):
        return ""
    return SINGLE_SPACE


def build_edit(entry: CursorRegion) -> Edit:
    return Edit(
        erasure=entry.region.range,
        replacement=choose_replacement(entry),
        prefix_trim_size=entry.region.prefix_trim_size,
        cursor_index=entry.index,
    )
