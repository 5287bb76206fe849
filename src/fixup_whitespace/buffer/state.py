"""Positions, ranges, selections, and line snapshots for buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Line/column coordinate; columns are ``str`` indices into the line."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 0:
            raise ValueError(f"line must be >= 0, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")

    def translate(self, delta: int = 0) -> "Position":
        """Return a position ``delta`` columns away on the same line."""

        return Position(self.line, self.column + delta)

    def with_column(self, column: int) -> "Position":
        return Position(self.line, column)


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open interval ``[start, end)``; the ends are stored in order."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> "Range":
        return cls(Position(line, start), Position(line, end))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    @property
    def width(self) -> int:
        if not self.is_single_line:
            raise ValueError("width is only defined for single-line ranges")
        return self.end.column - self.start.column

    def contains(self, position: Position) -> bool:
        return self.start <= position < self.end


@dataclass(frozen=True, slots=True)
class Selection:
    """A cursor: ``active`` is where it sits, ``anchor`` is the fixed end."""

    anchor: Position
    active: Position

    @classmethod
    def caret(cls, position: Position) -> "Selection":
        return cls(anchor=position, active=position)

    @classmethod
    def at(cls, line: int, column: int) -> "Selection":
        return cls.caret(Position(line, column))

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    @property
    def is_reversed(self) -> bool:
        return self.active < self.anchor

    @property
    def start(self) -> Position:
        return min(self.anchor, self.active)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.active)

    def with_active(self, active: Position) -> "Selection":
        return Selection(anchor=self.anchor, active=active)


@dataclass(frozen=True, slots=True)
class Line:
    """Immutable snapshot of one buffer line."""

    index: int
    text: str

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def range(self) -> Range:
        return Range.on_line(self.index, 0, len(self.text))
