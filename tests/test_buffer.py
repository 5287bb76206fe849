from __future__ import annotations

import pytest

from fixup_whitespace.buffer import (
    Buffer,
    BufferDocument,
    BufferValidationError,
    EditRejectedError,
    Position,
    Range,
    Selection,
)


def make_buffer(text: str, *selections: Selection) -> Buffer:
    return Buffer.from_text(text, name="test", selections=list(selections) or None)


def test_position_translate_and_ordering() -> None:
    position = Position(2, 5)

    assert position.translate(3) == Position(2, 8)
    assert position.translate(-5) == Position(2, 0)
    assert Position(1, 9) < Position(2, 0) < Position(2, 1)
    with pytest.raises(ValueError):
        position.translate(-6)


def test_range_orders_its_ends() -> None:
    erasure = Range(Position(0, 9), Position(0, 4))

    assert erasure.start == Position(0, 4)
    assert erasure.width == 5
    assert erasure.contains(Position(0, 4))
    assert not erasure.contains(Position(0, 9))


def test_selection_helpers() -> None:
    selection = Selection(anchor=Position(0, 8), active=Position(0, 2))

    assert selection.is_reversed
    assert selection.start == Position(0, 2)
    assert selection.end == Position(0, 8)
    assert Selection.at(1, 1).is_empty


def test_document_round_trips_text() -> None:
    document = BufferDocument.from_text("one\n\ntwo\n")

    assert document.snapshot() == ("one", "", "two", "")
    assert document.text == "one\n\ntwo\n"
    assert document.line_at(2).range == Range.on_line(2, 0, 3)


def test_set_selections_validates_and_merges() -> None:
    buffer = make_buffer("abc\nde")

    buffer.set_selections([Selection.at(0, 1), Selection.at(1, 2), Selection.at(0, 1)])

    assert buffer.selections == (Selection.at(0, 1), Selection.at(1, 2))
    with pytest.raises(BufferValidationError):
        buffer.set_selections([Selection.at(1, 3)])
    with pytest.raises(BufferValidationError):
        buffer.set_selections([])


def test_apply_edits_replaces_all_ranges_in_one_version() -> None:
    buffer = make_buffer("a   b   c", Selection.at(0, 0))
    version = buffer.document.version

    delta = buffer.apply_edits(
        [(Range.on_line(0, 1, 4), " "), (Range.on_line(0, 5, 8), " ")]
    )

    assert buffer.text == "a b c"
    assert delta.version == version + 1
    assert delta.edit_count == 2


def test_apply_edits_tracks_selection_ends() -> None:
    buffer = make_buffer(
        "xx      yy zz",
        Selection.at(0, 2),
        Selection.at(0, 5),
        Selection.at(0, 8),
        Selection.at(0, 12),
    )

    buffer.apply_edits([(Range.on_line(0, 2, 8), " ")])

    assert buffer.text == "xx yy zz"
    assert buffer.selections == (
        Selection.at(0, 2),
        Selection.at(0, 3),
        Selection.at(0, 7),
    )


def test_insertion_at_cursor_leaves_cursor_before_it() -> None:
    buffer = make_buffer("ab", Selection.at(0, 1))

    buffer.apply_edits([(Range.on_line(0, 1, 1), " ")])

    assert buffer.text == "a b"
    assert buffer.primary == Selection.at(0, 1)


@pytest.mark.parametrize(
    "edits",
    [
        [(Range.on_line(0, 0, 3), ""), (Range.on_line(0, 2, 4), "")],
        [(Range.on_line(0, 1, 1), "x"), (Range.on_line(0, 1, 2), "")],
        [(Range.on_line(0, 0, 9), "")],
        [(Range(Position(0, 0), Position(1, 0)), "")],
        [(Range.on_line(0, 0, 1), "a\nb")],
    ],
)
def test_rejected_batches_leave_buffer_untouched(edits) -> None:
    buffer = make_buffer("abcd\nefgh", Selection.at(0, 2))
    version = buffer.document.version

    with pytest.raises(EditRejectedError) as excinfo:
        buffer.apply_edits(edits)

    assert excinfo.value.reason
    assert buffer.text == "abcd\nefgh"
    assert buffer.document.version == version
    assert buffer.selections == (Selection.at(0, 2),)
    assert len(buffer.undo_timeline) == 0


def test_touching_ranges_are_accepted() -> None:
    buffer = make_buffer("ab  cd")

    buffer.apply_edits([(Range.on_line(0, 2, 4), ""), (Range.on_line(0, 4, 6), "X")])

    assert buffer.text == "abX"


def test_undo_and_redo_restore_text_and_selections() -> None:
    buffer = make_buffer("a   b", Selection.at(0, 3))

    buffer.apply_edits([(Range.on_line(0, 1, 4), " ")])
    after = buffer.selections

    assert buffer.undo() is True
    assert buffer.text == "a   b"
    assert buffer.selections == (Selection.at(0, 3),)
    assert buffer.undo() is False

    assert buffer.redo() is True
    assert buffer.text == "a b"
    assert buffer.selections == after
    assert buffer.redo() is False


def test_mirror_carries_selections() -> None:
    buffer = make_buffer("one\ntwo", Selection.at(1, 1))

    mirror = buffer.mirror(attributes={"name": "t"})

    assert mirror.lines == ["one", "two"]
    assert mirror.selections == (Selection.at(1, 1),)
    assert mirror.attributes == {"name": "t"}


def test_crlf_breaks_stay_out_of_line_text() -> None:
    document = BufferDocument.from_text("foo  \r\nbar\nbaz")

    assert document.snapshot() == ("foo  ", "bar", "baz")
    assert document.text == "foo  \r\nbar\nbaz"


def test_edits_keep_crlf_line_breaks() -> None:
    buffer = make_buffer("a   b\r\nc  \r\n", Selection.at(0, 2))

    buffer.apply_edits([(Range.on_line(0, 1, 4), " "), (Range.on_line(1, 1, 3), "")])

    assert buffer.text == "a b\r\nc\r\n"
    assert buffer.mirror().lines == ["a b", "c", ""]
    assert buffer.undo() is True
    assert buffer.text == "a   b\r\nc  \r\n"


def test_edit_that_changes_nothing_is_not_recorded() -> None:
    buffer = make_buffer("abc", Selection.at(0, 1))
    version = buffer.document.version

    delta = buffer.apply_edits([(Range.on_line(0, 0, 0), "")])

    assert delta.version == version
    assert buffer.document.version == version
    assert len(buffer.undo_timeline) == 0
    assert buffer.undo() is False
