"""Minimal Textual adapter that wires a Workspace into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from fixup_whitespace.buffer import Buffer, BufferMirror, Position, Selection
from fixup_whitespace.commands import (
    FIXUP_WHITESPACE_COMMAND,
    CommandRegistry,
    activate,
    deactivate,
)
from fixup_whitespace.host import Notification, Workspace


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


KeyAction = Callable[["TextualFixupAdapter", Buffer], Awaitable[str]]


class TextualFixupAdapter:
    """Translates key names into cursor moves, undo, and the fixup command."""

    def __init__(
        self,
        workspace: Workspace,
        hooks: TextualUIHooks,
        *,
        registry: Optional[CommandRegistry] = None,
    ) -> None:
        self.workspace = workspace
        self.hooks = hooks
        self.registry = registry or CommandRegistry(
            logger_name="fixup_whitespace.commands"
        )
        self._registrations = activate(self.registry, workspace)
        self._unsubscribe = workspace.subscribe(self._on_notification)
        self._refresh_buffer()

    async def handle_textual_key(self, key: str) -> str:
        """Run the action bound to ``key`` and return a short status string."""

        action = _KEY_ACTIONS.get(key.lower())
        if action is None:
            return "unbound"
        buffer = self.workspace.active_buffer
        self._log_state("key ->", key=key)
        if buffer is None and action is not _fixup:
            return "no_buffer"
        status = await action(self, buffer)  # type: ignore[arg-type]
        self._refresh_buffer()
        self._log_state("result <-", status=status)
        return status

    def close(self) -> None:
        deactivate(self._registrations)
        self._unsubscribe()

    def _on_notification(self, notification: Notification) -> None:
        self.hooks.update_status(f"{notification.level}: {notification.message}")
        self._log_state("notify ->", level=notification.level)

    def _refresh_buffer(self) -> None:
        buffer = self.workspace.active_buffer
        if buffer is None:
            return
        self.hooks.update_buffer(buffer.mirror(attributes={"name": buffer.name}))

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        buffer = self.workspace.active_buffer
        if buffer is not None:
            fields = {
                "buffer": buffer.name,
                "version": buffer.document.version,
                "cursors": len(buffer.selections),
                **fields,
            }
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


def _clamp(buffer: Buffer, line: int, column: int) -> Position:
    line = max(0, min(line, buffer.document.line_count - 1))
    column = max(0, min(column, len(buffer.document.get_line(line))))
    return Position(line, column)


def _move(d_line: int, d_column: int) -> KeyAction:
    async def _action(adapter: TextualFixupAdapter, buffer: Buffer) -> str:
        del adapter
        buffer.set_selections(
            Selection.caret(
                _clamp(buffer, sel.active.line + d_line, sel.active.column + d_column)
            )
            for sel in buffer.selections
        )
        return "move"

    return _action


async def _line_start(adapter: TextualFixupAdapter, buffer: Buffer) -> str:
    del adapter
    buffer.set_selections(
        Selection.at(sel.active.line, 0) for sel in buffer.selections
    )
    return "move"


async def _line_end(adapter: TextualFixupAdapter, buffer: Buffer) -> str:
    del adapter
    buffer.set_selections(
        Selection.at(sel.active.line, len(buffer.document.get_line(sel.active.line)))
        for sel in buffer.selections
    )
    return "move"


async def _add_cursor_below(adapter: TextualFixupAdapter, buffer: Buffer) -> str:
    del adapter
    last = buffer.selections[-1].active
    if last.line + 1 >= buffer.document.line_count:
        return "no_line_below"
    added = Selection.caret(_clamp(buffer, last.line + 1, last.column))
    buffer.set_selections((*buffer.selections, added))
    return "add_cursor"


async def _collapse(adapter: TextualFixupAdapter, buffer: Buffer) -> str:
    del adapter
    buffer.set_selections([buffer.primary])
    return "single_cursor"


async def _undo(adapter: TextualFixupAdapter, buffer: Buffer) -> str:
    del adapter
    return "undo" if buffer.undo() else "nothing_to_undo"


async def _redo(adapter: TextualFixupAdapter, buffer: Buffer) -> str:
    del adapter
    return "redo" if buffer.redo() else "nothing_to_redo"


async def _fixup(adapter: TextualFixupAdapter, buffer: Optional[Buffer]) -> str:
    del buffer
    result = await adapter.registry.execute(FIXUP_WHITESPACE_COMMAND)
    return f"fixup:{result.status}"


_KEY_ACTIONS: Dict[str, KeyAction] = {
    "left": _move(0, -1),
    "right": _move(0, 1),
    "up": _move(-1, 0),
    "down": _move(1, 0),
    "home": _line_start,
    "end": _line_end,
    "ctrl+down": _add_cursor_below,
    "escape": _collapse,
    "ctrl+z": _undo,
    "ctrl+y": _redo,
    "alt+space": _fixup,
    "ctrl+space": _fixup,
}


__all__ = ["TextualFixupAdapter", "TextualUIHooks"]
