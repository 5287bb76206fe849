"""Command registration and dispatch."""

from .activation import FIXUP_WHITESPACE_COMMAND, activate, deactivate
from .registry import (
    CommandConflictError,
    CommandHandler,
    CommandRegistry,
    Registration,
    dispose_all,
)

__all__ = [
    "FIXUP_WHITESPACE_COMMAND",
    "CommandConflictError",
    "CommandHandler",
    "CommandRegistry",
    "Registration",
    "activate",
    "deactivate",
    "dispose_all",
]
