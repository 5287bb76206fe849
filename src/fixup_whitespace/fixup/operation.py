"""The fixup-whitespace command: plan, apply atomically, remap cursors."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from fixup_whitespace.host.editor import EditorHost
from fixup_whitespace.runtime import telemetry

from .planner import FixupPlan, plan_fixup
from .remap import CursorRemapError, remap_selections

NO_EDITOR_MESSAGE = "Can't fixup-whitespace without active editor!"
REJECTED_PREFIX = "fixup-whitespace: Unsupported edit: "

LOGGER_NAME = "fixup_whitespace.fixup"


@dataclass(slots=True)
class FixupResult:
    """What one run of the command did."""

    status: str = "ok"
    message: Optional[str] = None
    plan: Optional[FixupPlan] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


async def fixup_whitespace(host: EditorHost) -> FixupResult:
    """Collapse the whitespace around every cursor of the active buffer.

    Each run of blanks touching a cursor becomes a single space, or nothing
    when it sits at the start or end of its line. All runs change in one
    batch edit; afterwards each cursor is placed on the collapsed space (or
    where the run used to be).
    """

    buffer = host.active_buffer
    if buffer is None:
        host.show_information(NO_EDITOR_MESSAGE)
        return FixupResult(status="no_buffer", message=NO_EDITOR_MESSAGE)

    with telemetry.span(
        "fixup::whitespace",
        logger_name=LOGGER_NAME,
        component="fixup",
        metadata={"buffer": buffer.name, "cursors": len(buffer.selections)},
    ) as handle:
        plan = plan_fixup(buffer.document.snapshot(), buffer.selections)
        handle.add_metadata("edits", len(plan.edits))
        handle.add_metadata("dropped", len(plan.dropped))

        outcome = await host.apply_edits(buffer, plan.replacements)
        if not outcome.applied:
            message = f"{REJECTED_PREFIX}{outcome.reason}"
            handle.warn(outcome.reason or "rejected")
            host.show_warning(message)
            return FixupResult(status="rejected", message=message, plan=plan)

        try:
            remapped = remap_selections(buffer.selections, plan.edits)
        except CursorRemapError as exc:
            telemetry.record_event(
                "fixup.cursor_mismatch",
                level="info",
                data={"seen": exc.seen, "expected": exc.expected},
                logger_name=LOGGER_NAME,
            )
            host.show_information(str(exc))
            return FixupResult(status="cursor_mismatch", message=str(exc), plan=plan)

        host.replace_selections(buffer, remapped)
        return FixupResult(plan=plan)


def run_fixup_whitespace(host: EditorHost) -> FixupResult:
    """Blocking wrapper for callers that are not already in an event loop."""

    return asyncio.run(fixup_whitespace(host))
