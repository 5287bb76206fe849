"""Editor host contract and the in-memory workspace implementation."""

from .editor import (
    INFO,
    WARNING,
    EditorHost,
    EditResult,
    Notification,
    NotificationListener,
    Workspace,
)

__all__ = [
    "EditorHost",
    "EditResult",
    "Notification",
    "NotificationListener",
    "Workspace",
    "INFO",
    "WARNING",
]
