from __future__ import annotations

import pytest

from fixup_whitespace.buffer import BufferValidationError, Line, Position, Selection
from fixup_whitespace.fixup import resolve_region, resolve_regions
from fixup_whitespace.fixup.resolver import leading_blank_count, trailing_blank_count

TOO_MUCH = "There is too much            space here."
BEFORE = "      This has space before it."
AFTER = "This has space after it.       "


def resolve(text: str, column: int):
    return resolve_region(Line(index=0, text=text), Selection.at(0, column))


def test_blank_counts_use_unicode_whitespace() -> None:
    assert trailing_blank_count("ab \t ") == 3
    assert leading_blank_count("  x ") == 2
    assert trailing_blank_count("") == 0
    assert leading_blank_count("word") == 0


def test_interior_run_spans_both_sides_of_cursor() -> None:
    entry = resolve(TOO_MUCH, 20)

    assert entry.region.start == Position(0, 17)
    assert entry.region.end == Position(0, 29)
    assert entry.region.prefix_trim_size == 3
    assert entry.region.width == 12
    assert not entry.at_line_start
    assert not entry.at_line_end
    assert not entry.prefix_fully_erased
    assert not entry.suffix_fully_erased


def test_cursor_between_words_gives_empty_region() -> None:
    entry = resolve("There is spacemissing here.", 14)

    assert entry.region.range.is_empty
    assert entry.region.start == Position(0, 14)
    assert entry.region.prefix_trim_size == 0


def test_leading_run_consumes_whole_prefix() -> None:
    entry = resolve(BEFORE, 3)

    assert entry.region.range.start == Position(0, 0)
    assert entry.region.range.end == Position(0, 6)
    assert entry.prefix_fully_erased
    assert not entry.at_line_start


def test_trailing_run_consumes_whole_suffix() -> None:
    entry = resolve(AFTER, 28)

    assert entry.region.start == Position(0, 24)
    assert entry.region.end == Position(0, 31)
    assert entry.suffix_fully_erased
    assert not entry.at_line_end


def test_line_edges_are_flagged() -> None:
    start = resolve(TOO_MUCH, 0)
    end = resolve(TOO_MUCH, len(TOO_MUCH))

    assert start.at_line_start and start.region.range.is_empty
    assert end.at_line_end and end.region.range.is_empty


def test_empty_line_is_both_edges() -> None:
    entry = resolve("", 0)

    assert entry.at_line_start
    assert entry.at_line_end
    assert entry.region.width == 0


def test_non_ascii_blanks_are_part_of_the_run() -> None:
    entry = resolve("a\u00a0\u2003b", 2)

    assert entry.region.start.column == 1
    assert entry.region.end.column == 3


def test_cursor_past_line_end_is_rejected() -> None:
    with pytest.raises(BufferValidationError):
        resolve("abc", 4)


def test_snapshot_must_match_cursor_line() -> None:
    with pytest.raises(BufferValidationError):
        resolve_region(Line(index=1, text="abc"), Selection.at(0, 1))


def test_resolve_regions_keeps_order_and_indices() -> None:
    lines = ["a  b", "", "  c"]
    selections = [Selection.at(2, 1), Selection.at(0, 2), Selection.at(1, 0)]

    entries = resolve_regions(lines, selections)

    assert [entry.index for entry in entries] == [0, 1, 2]
    assert [entry.region.key for entry in entries] == [(2, 0), (0, 1), (1, 0)]


def test_resolve_regions_rejects_missing_line() -> None:
    with pytest.raises(BufferValidationError):
        resolve_regions(["only"], [Selection.at(3, 0)])


def test_anchor_does_not_drive_the_region() -> None:
    selection = Selection(anchor=Position(0, 0), active=Position(0, 20))

    entry = resolve_region(Line(index=0, text=TOO_MUCH), selection)

    assert entry.region.key == (0, 17)
    assert entry.selection is selection
