"""Find the whitespace run each cursor is touching."""

from __future__ import annotations

from typing import Iterable, Sequence

from fixup_whitespace.buffer.state import Line, Selection
from fixup_whitespace.buffer.sync import BufferValidationError

from .models import CursorRegion, ErasureRegion


def trailing_blank_count(text: str) -> int:
    return len(text) - len(text.rstrip())


def leading_blank_count(text: str) -> int:
    return len(text) - len(text.lstrip())


def resolve_region(line: Line, selection: Selection, *, index: int = 0) -> CursorRegion:
    """Compute the erasure region around ``selection.active`` on ``line``.

    Whitespace is anything ``str.isspace`` accepts, so non-breaking and
    other Unicode blanks are collapsed along with spaces and tabs.
    """

    active = selection.active
    if active.line != line.index:
        raise BufferValidationError(
            f"cursor is on line {active.line}, snapshot is line {line.index}",
            position=active,
        )
    cursor = active.column
    if cursor > line.length:
        raise BufferValidationError("Column out of range", position=active)

    prefix = line.text[:cursor]
    suffix = line.text[cursor:]
    prefix_trim_size = trailing_blank_count(prefix)
    suffix_trim_size = leading_blank_count(suffix)

    region = ErasureRegion(
        start=active.translate(-prefix_trim_size),
        end=active.translate(suffix_trim_size),
        prefix_trim_size=prefix_trim_size,
    )
    return CursorRegion(
        index=index,
        selection=selection,
        region=region,
        at_line_start=cursor == 0,
        at_line_end=cursor == line.length,
        prefix_fully_erased=prefix_trim_size == len(prefix),
        suffix_fully_erased=suffix_trim_size == len(suffix),
    )


def resolve_regions(
    lines: Sequence[str], selections: Iterable[Selection]
) -> list[CursorRegion]:
    """Resolve every cursor, in order, against one snapshot of ``lines``."""

    snapshots: dict[int, Line] = {}
    resolved: list[CursorRegion] = []
    for index, selection in enumerate(selections):
        row = selection.active.line
        if row not in snapshots:
            if row >= len(lines):
                raise BufferValidationError(
                    "Line out of range", position=selection.active
                )
            snapshots[row] = Line(index=row, text=lines[row])
        resolved.append(resolve_region(snapshots[row], selection, index=index))
    return resolved
