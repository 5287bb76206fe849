"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Iterable

from .document import BufferDocument
from .state import Position, Range, Selection
from .sync import BufferValidationError, EditRejectedError


def ensure_position(document: BufferDocument, position: Position) -> Position:
    if position.line >= document.line_count:
        raise BufferValidationError("Line out of range", position=position)
    line = document.get_line(position.line)
    if position.column > len(line):
        raise BufferValidationError("Column out of range", position=position)
    return position


def ensure_selection(document: BufferDocument, selection: Selection) -> Selection:
    ensure_position(document, selection.anchor)
    ensure_position(document, selection.active)
    return selection


def ensure_edits(
    document: BufferDocument, edits: Iterable[tuple[Range, str]]
) -> list[tuple[Range, str]]:
    """Validate a batch of edits and return it ordered by start position.

    Each range must sit on one line, the replacement must not contain a line
    break, and no two ranges may overlap or share a start position.
    """

    ordered = sorted(edits, key=lambda pair: (pair[0].start, pair[0].end))
    for erasure, text in ordered:
        if not erasure.is_single_line:
            raise EditRejectedError(
                "multi-line ranges are not supported", edits=ordered
            )
        if "\n" in text or "\r" in text:
            raise EditRejectedError(
                "replacement text may not contain line breaks", edits=ordered
            )
        try:
            ensure_position(document, erasure.start)
            ensure_position(document, erasure.end)
        except BufferValidationError as exc:
            raise EditRejectedError(
                f"range {_describe(erasure)} is outside the document",
                edits=ordered,
                position=exc.position,
            ) from exc

    for previous, current in zip(ordered, ordered[1:]):
        left, right = previous[0], current[0]
        if right.start < left.end or right.start == left.start:
            raise EditRejectedError(
                f"overlapping ranges {_describe(left)} and {_describe(right)}",
                edits=ordered,
                position=right.start,
            )
    return ordered


def _describe(erasure: Range) -> str:
    start, end = erasure.start, erasure.end
    return f"{start.line}:{start.column}-{end.line}:{end.column}"
