"""Pure planning step: lines + cursors in, deduplicated edits out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from fixup_whitespace.buffer.state import Range, Selection

from .dedup import deduplicate
from .models import Edit
from .policy import build_edit
from .resolver import resolve_regions


@dataclass(frozen=True, slots=True)
class FixupPlan:
    edits: tuple[Edit, ...]
    dropped: tuple[int, ...] = ()

    @property
    def replacements(self) -> list[tuple[Range, str]]:
        return [edit.as_pair() for edit in self.edits]


def plan_fixup(lines: Sequence[str], selections: Sequence[Selection]) -> FixupPlan:
    """Plan one edit per distinct whitespace run under ``selections``.

    ``lines`` is read once up front; nothing here touches a live buffer.
    """

    kept, dropped = deduplicate(resolve_regions(lines, selections))
    return FixupPlan(
        edits=tuple(build_edit(entry) for entry in kept),
        dropped=tuple(entry.index for entry in dropped),
    )
