"""Put cursors back where the user meant them after the edit lands."""

from __future__ import annotations

from typing import Sequence

from fixup_whitespace.buffer.state import Selection

from .models import Edit


class CursorRemapError(RuntimeError):
    """Raised when the host's selection count no longer matches the edits."""

    def __init__(self, seen: int, expected: int) -> None:
        super().__init__(f"Not adjusting cursors: saw {seen} expected {expected}")
        self.seen = seen
        self.expected = expected


def active_delta(edit: Edit) -> int:
    """Column shift to undo the host parking the cursor after the replacement.

    The host moves a cursor that sat strictly inside (or at the end of) the
    erased range to the end of the inserted text. That only happened when
    some of the run lay before the cursor: either a run wider or narrower
    than one character with a non-empty prefix part, or a one-character run
    entirely in the prefix.
    """

    prefix = edit.prefix_trim_size
    if (edit.erased_width != 1 and prefix != 0) or prefix == 1:
        return -len(edit.replacement)
    return 0


def remap_selections(
    current: Sequence[Selection], edits: Sequence[Edit]
) -> list[Selection]:
    """Pair post-edit selections with their edits and nudge each active end.

    Anchors are left exactly where the host put them.
    """

    if len(current) != len(edits):
        raise CursorRemapError(len(current), len(edits))
    return [
        selection.with_active(selection.active.translate(active_delta(edit)))
        for selection, edit in zip(current, edits)
    ]
