"""Value types flowing through a single whitespace fixup."""

from __future__ import annotations

from dataclasses import dataclass

from fixup_whitespace.buffer.state import Position, Range, Selection

SINGLE_SPACE = " "


@dataclass(frozen=True, slots=True)
class ErasureRegion:
    """Whitespace around one cursor, plus how much of it lay before the cursor."""

    start: Position
    end: Position
    prefix_trim_size: int

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)

    @property
    def width(self) -> int:
        return self.end.column - self.start.column

    @property
    def key(self) -> tuple[int, int]:
        return (self.start.line, self.start.column)


@dataclass(frozen=True, slots=True)
class CursorRegion:
    """An erasure region tied to the cursor it was computed for."""

    index: int
    selection: Selection
    region: ErasureRegion
    at_line_start: bool
    at_line_end: bool
    prefix_fully_erased: bool
    suffix_fully_erased: bool


@dataclass(frozen=True, slots=True)
class Edit:
    erasure: Range
    replacement: str
    prefix_trim_size: int
    cursor_index: int

    @property
    def erased_width(self) -> int:
        return self.erasure.width

    def as_pair(self) -> tuple[Range, str]:
        return (self.erasure, self.replacement)
