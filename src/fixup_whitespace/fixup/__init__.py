"""Whitespace run resolution, deduplication, replacement, and cursor remapping."""

from .dedup import deduplicate
from .models import SINGLE_SPACE, CursorRegion, Edit, ErasureRegion
from .operation import FixupResult, fixup_whitespace, run_fixup_whitespace
from .planner import FixupPlan, plan_fixup
from .policy import build_edit, choose_replacement
from .remap import CursorRemapError, active_delta, remap_selections
from .resolver import resolve_region, resolve_regions

__all__ = [
    "SINGLE_SPACE",
    "CursorRegion",
    "CursorRemapError",
    "Edit",
    "ErasureRegion",
    "FixupPlan",
    "FixupResult",
    "active_delta",
    "build_edit",
    "choose_replacement",
    "deduplicate",
    "fixup_whitespace",
    "plan_fixup",
    "remap_selections",
    "resolve_region",
    "resolve_regions",
    "run_fixup_whitespace",
]
