"""High-level buffer façade combining document, selections, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, Optional, Sequence

from fixup_whitespace.runtime import telemetry

from .document import BufferDocument
from .state import Line, Position, Range, Selection
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_edits, ensure_selection


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    selections: tuple[Selection, ...]


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selections: tuple[Selection, ...]
    label: str
    edit_count: int


class Buffer:
    """A named document plus its ordered selection set.

    The selection set is never empty; the first selection is the primary
    cursor. Text changes go through :meth:`apply_edits` only.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        selections: Optional[Sequence[Selection]] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.undo_timeline = undo or UndoTimeline()
        self._selections: tuple[Selection, ...] = (Selection.at(0, 0),)
        if selections:
            self.set_selections(selections)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        selections: Optional[Sequence[Selection]] = None,
    ) -> "Buffer":
        return cls(
            name=name,
            document=BufferDocument.from_text(text),
            selections=selections,
        )

    @property
    def selections(self) -> tuple[Selection, ...]:
        return self._selections

    @property
    def primary(self) -> Selection:
        return self._selections[0]

    @property
    def text(self) -> str:
        return self.document.text

    def line_at(self, index: int) -> Line:
        if index < 0 or index >= self.document.line_count:
            raise BufferValidationError(
                "Line out of range", position=Position(max(index, 0), 0)
            )
        return self.document.line_at(index)

    def set_selections(self, selections: Iterable[Selection]) -> None:
        """Replace the whole selection set in one assignment."""

        validated = [ensure_selection(self.document, sel) for sel in selections]
        if not validated:
            raise BufferValidationError("A buffer needs at least one selection")
        self._selections = _merge_identical(validated)

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            selections=self._selections,
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            selections=self._selections,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    def apply_edits(
        self, edits: Iterable[tuple[Range, str]], *, label: str = "batch_edit"
    ) -> BufferDelta:
        """Apply every ``(range, text)`` pair atomically or raise.

        Raises :class:`EditRejectedError` without touching the buffer when
        any pair is invalid. Selection ends are carried through each edit:
        ends at or before the range start stay put, ends inside the range
        (or at its end) move to the end of the inserted text, and ends after
        it shift by the length change.
        """

        pairs = list(edits)
        with Transaction(self, label, edit_count=len(pairs)) as tx:
            ordered = ensure_edits(self.document, pairs)
            lines = list(self.document.snapshot())
            selections = list(self._selections)
            for erasure, text in reversed(ordered):
                row = erasure.start.line
                start, end = erasure.start.column, erasure.end.column
                original = lines[row]
                lines[row] = original[:start] + text + original[end:]
                selections = [
                    Selection(
                        anchor=_track(sel.anchor, erasure, len(text)),
                        active=_track(sel.active, erasure, len(text)),
                    )
                    for sel in selections
                ]
            tx.commit(lines, _merge_identical(selections))

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            selections=self._selections,
            label=label,
            edit_count=len(pairs),
        )

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.selections_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.selections_after)
        return True

    def _restore(self, text: str, selections: Sequence[Selection]) -> None:
        self.document = self.document.replace_text(text)
        self._selections = tuple(selections)


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry-wrapped unit of work that swaps in the edited state at once."""

    def __init__(self, buffer: Buffer, label: str, *, edit_count: int = 0) -> None:
        self.buffer = buffer
        self.label = label
        self.edit_count = edit_count
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "edits": self.edit_count},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, lines: Sequence[str], selections: Sequence[Selection]) -> None:
        buffer = self.buffer
        before_text = buffer.document.text
        before_selections = buffer.selections
        if tuple(lines) == buffer.document.snapshot() and (
            tuple(selections) == before_selections
        ):
            return
        buffer.document = buffer.document.replace(lines=lines)
        buffer._selections = tuple(selections)
        buffer.undo_timeline.push(
            UndoEntry(
                label=self.label,
                before_text=before_text,
                after_text=buffer.document.text,
                selections_before=before_selections,
                selections_after=buffer.selections,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _track(position: Position, erasure: Range, inserted: int) -> Position:
    """Carry a selection end through one replacement of ``erasure``.

    Both ends of a selection lying wholly inside ``erasure`` land on the end
    of the replacement. They are not collapsed onto the start, so after the
    fixup moves the active end back onto a collapsed space such a selection
    keeps a width of one (anchor 18, active 17) instead of becoming a caret.
    """

    if position.line != erasure.start.line:
        return position
    start, end = erasure.start.column, erasure.end.column
    column = position.column
    if column <= start:
        return position
    if column <= end:
        return position.with_column(start + inserted)
    return position.with_column(column + inserted - (end - start))


def _merge_identical(selections: Iterable[Selection]) -> tuple[Selection, ...]:
    return tuple(dict.fromkeys(selections))
