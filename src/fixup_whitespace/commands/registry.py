"""Command registry: ids mapped to parameterless handlers."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Union

from fixup_whitespace.runtime.telemetry import span

CommandHandler = Callable[[], Union[Any, Awaitable[Any]]]


class CommandConflictError(RuntimeError):
    """Raised when a command id is registered twice."""

    def __init__(self, command_id: str) -> None:
        super().__init__(f"Command '{command_id}' is already registered")
        self.command_id = command_id


@dataclass(slots=True)
class Registration:
    """Handle returned by ``register``; ``dispose`` undoes the registration."""

    command_id: str
    registry: Optional["CommandRegistry"] = field(default=None, repr=False)

    @property
    def disposed(self) -> bool:
        return self.registry is None

    def dispose(self) -> None:
        if self.registry is None:
            return
        self.registry.unregister(self.command_id)
        self.registry = None


class CommandRegistry:
    """Owns command handlers and dispatches them by id."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._handlers: Dict[str, CommandHandler] = {}
        self._logger_name = logger_name

    def register(self, command_id: str, handler: CommandHandler) -> Registration:
        with span(
            "commands::register",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command_id},
        ):
            if not command_id:
                raise ValueError("command_id cannot be empty")
            if command_id in self._handlers:
                raise CommandConflictError(command_id)
            self._handlers[command_id] = handler
            return Registration(command_id=command_id, registry=self)

    def unregister(self, command_id: str) -> Optional[CommandHandler]:
        return self._handlers.pop(command_id, None)

    def has(self, command_id: str) -> bool:
        return command_id in self._handlers

    def commands(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    async def execute(self, command_id: str) -> Any:
        """Run the handler for ``command_id``, awaiting it if it is async."""

        try:
            handler = self._handlers[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

        with span(
            "commands::execute",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command_id},
        ):
            result = handler()
            if inspect.isawaitable(result):
                result = await result
            return result


def dispose_all(registrations: Iterable[Registration]) -> None:
    for registration in registrations:
        registration.dispose()


__all__ = [
    "CommandConflictError",
    "CommandHandler",
    "CommandRegistry",
    "Registration",
    "dispose_all",
]
