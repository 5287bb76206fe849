"""Core document data structures for fixup_whitespace buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .state import Line

LF = "\n"
CRLF = "\r\n"


def split_lines(text: str) -> tuple[List[str], List[str]]:
    """Split ``text`` into line contents and the breaks that follow them.

    Only ``\\n`` and ``\\r\\n`` end a line. The terminators are kept out of
    the line contents so columns never land on a carriage return.
    """

    lines: List[str] = []
    breaks: List[str] = []
    raw = text.split(LF)
    for index, line in enumerate(raw):
        if index < len(raw) - 1:
            if line.endswith("\r"):
                lines.append(line[:-1])
                breaks.append(CRLF)
            else:
                lines.append(line)
                breaks.append(LF)
        else:
            lines.append(line)
    return lines, breaks


@dataclass(slots=True)
class BufferDocument:
    """Immutable-ish text storage built on a simple list-of-lines model.

    Every edit produces a new document with a bumped ``version``; callers
    holding an older document keep seeing the text it was created with.
    ``_breaks[i]`` is the terminator written after line ``i``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    _breaks: List[str] = field(default_factory=list)
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        lines, breaks = split_lines(text)
        return cls(_lines=lines, _breaks=breaks, version=0, dirty=False)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def text(self) -> str:
        parts: List[str] = []
        for index, line in enumerate(self._lines):
            parts.append(line)
            if index < len(self._lines) - 1:
                parts.append(self.line_break(index))
        return "".join(parts)

    def line_break(self, index: int) -> str:
        if index < len(self._breaks):
            return self._breaks[index]
        return LF

    def replace(
        self,
        *,
        lines: Iterable[str],
        breaks: Optional[Iterable[str]] = None,
        dirty: bool | None = None,
    ) -> "BufferDocument":
        """Return a new document with the provided lines and bumped version.

        Line breaks are kept from this document unless ``breaks`` is given.
        """

        updated = BufferDocument(
            _lines=list(lines),
            _breaks=list(self._breaks if breaks is None else breaks),
            version=self.version + 1,
        )
        updated.dirty = bool(dirty if dirty is not None else True)
        if not updated._lines:
            updated._lines = [""]
        del updated._breaks[len(updated._lines) - 1 :]
        return updated

    def replace_text(self, text: str) -> "BufferDocument":
        lines, breaks = split_lines(text)
        return self.replace(lines=lines, breaks=breaks)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_at(self, index: int) -> Line:
        return Line(index=index, text=self._lines[index])
