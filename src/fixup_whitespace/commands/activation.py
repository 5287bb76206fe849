"""Wire the fixup command into a registry for a given host."""

from __future__ import annotations

import os
from typing import List

from fixup_whitespace.fixup.operation import FixupResult, fixup_whitespace
from fixup_whitespace.host.editor import EditorHost

from .registry import CommandRegistry, Registration, dispose_all

FIXUP_WHITESPACE_COMMAND = os.getenv(
    "FIXUP_WHITESPACE_COMMAND_ID", "fixup-whitespace.fixupWhitespace"
)


def activate(registry: CommandRegistry, host: EditorHost) -> List[Registration]:
    """Register the package's commands against ``host``."""

    async def _fixup() -> FixupResult:
        return await fixup_whitespace(host)

    return [registry.register(FIXUP_WHITESPACE_COMMAND, _fixup)]


def deactivate(registrations: List[Registration]) -> None:
    dispose_all(registrations)
    registrations.clear()
