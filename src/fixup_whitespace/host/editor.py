"""Host contract the fixup operation talks to, plus an in-memory host."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from fixup_whitespace.buffer import (
    Buffer,
    BufferValidationError,
    EditRejectedError,
    Range,
    Selection,
)
from fixup_whitespace.runtime import telemetry

INFO = "info"
WARNING = "warning"


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of one batch edit request."""

    applied: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "EditResult":
        return cls(applied=True)

    @classmethod
    def rejected(cls, reason: str) -> "EditResult":
        return cls(applied=False, reason=reason)


@dataclass(frozen=True, slots=True)
class Notification:
    level: str
    message: str


NotificationListener = Callable[[Notification], None]


class EditorHost(Protocol):
    """What the fixup operation needs from an editor."""

    @property
    def active_buffer(self) -> Optional[Buffer]: ...

    async def apply_edits(
        self, buffer: Buffer, edits: Sequence[tuple[Range, str]]
    ) -> EditResult: ...

    def replace_selections(
        self, buffer: Buffer, selections: Sequence[Selection]
    ) -> None: ...

    def show_information(self, message: str) -> None: ...

    def show_warning(self, message: str) -> None: ...


class Workspace:
    """In-memory editor host owning named buffers and user notifications."""

    def __init__(self) -> None:
        self._buffers: Dict[str, Buffer] = {}
        self._active: Optional[str] = None
        self._pending_edit = False
        self._listeners: List[NotificationListener] = []
        self.notifications: List[Notification] = []
        self.logger = telemetry.get_logger("fixup_whitespace.host")

    @property
    def active_buffer(self) -> Optional[Buffer]:
        if self._active is None:
            return None
        return self._buffers.get(self._active)

    def open_buffer(
        self,
        name: str,
        text: str = "",
        *,
        selections: Optional[Sequence[Selection]] = None,
        activate: bool = True,
    ) -> Buffer:
        if name in self._buffers:
            raise ValueError(f"Buffer '{name}' is already open")
        buffer = Buffer.from_text(text, name=name, selections=selections)
        self._buffers[name] = buffer
        if activate:
            self._active = name
        return buffer

    def close_buffer(self, name: str) -> None:
        if self._buffers.pop(name, None) is None:
            raise KeyError(f"Buffer '{name}' is not open")
        if self._active == name:
            self._active = next(iter(self._buffers), None)

    def set_active(self, name: Optional[str]) -> None:
        if name is not None and name not in self._buffers:
            raise KeyError(f"Buffer '{name}' is not open")
        self._active = name

    def buffers(self) -> tuple[str, ...]:
        return tuple(self._buffers)

    async def apply_edits(
        self, buffer: Buffer, edits: Sequence[tuple[Range, str]]
    ) -> EditResult:
        """Apply ``edits`` to ``buffer`` as one undoable step.

        Only one batch may be in flight; a second request while the first is
        outstanding is rejected rather than queued.
        """

        if self._pending_edit:
            return EditResult.rejected("another edit is in progress")
        self._pending_edit = True
        try:
            await asyncio.sleep(0)
            buffer.apply_edits(edits, label="fixup_whitespace")
        except EditRejectedError as exc:
            return EditResult.rejected(exc.reason)
        except BufferValidationError as exc:
            return EditResult.rejected(str(exc))
        finally:
            self._pending_edit = False
        return EditResult.success()

    def replace_selections(
        self, buffer: Buffer, selections: Sequence[Selection]
    ) -> None:
        buffer.set_selections(selections)

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def show_information(self, message: str) -> None:
        self._notify(Notification(level=INFO, message=message))

    def show_warning(self, message: str) -> None:
        self._notify(Notification(level=WARNING, message=message))

    def _notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        telemetry.log_kv(
            self.logger,
            notification.level,
            "event::host.notify",
            text=notification.message,
        )
        for listener in list(self._listeners):
            listener(notification)


__all__ = [
    "EditResult",
    "EditorHost",
    "Notification",
    "NotificationListener",
    "Workspace",
    "INFO",
    "WARNING",
]
