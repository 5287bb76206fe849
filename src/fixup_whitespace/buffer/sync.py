"""Adapter boundary types and errors shared by buffers and hosts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .document import split_lines
from .state import Position, Range, Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    selections: tuple[Selection, ...]
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def lines(self) -> list[str]:
        return split_lines(self.text)[0]


class BufferValidationError(RuntimeError):
    """Raised when adapters or buffers provide out-of-bounds positions."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


class EditRejectedError(BufferValidationError):
    """Raised when a batch edit cannot be applied as a whole."""

    def __init__(
        self,
        reason: str,
        *,
        edits: Sequence[tuple[Range, str]] = (),
        position: Position | None = None,
    ) -> None:
        super().__init__(reason, position=position)
        self.reason = reason
        self.edits = tuple(edits)
