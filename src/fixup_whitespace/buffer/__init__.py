"""Buffer abstractions: positions, selections, batch edits, and undo."""

from .buffer import Buffer, BufferDelta, BufferView, Transaction
from .document import BufferDocument, split_lines
from .state import Line, Position, Range, Selection
from .sync import BufferMirror, BufferValidationError, EditRejectedError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_edits, ensure_position, ensure_selection

__all__ = [
    "BufferDocument",
    "split_lines",
    "Position",
    "Range",
    "Selection",
    "Line",
    "UndoTimeline",
    "UndoEntry",
    "Buffer",
    "BufferDelta",
    "BufferView",
    "Transaction",
    "BufferMirror",
    "BufferValidationError",
    "EditRejectedError",
    "ensure_edits",
    "ensure_position",
    "ensure_selection",
]
