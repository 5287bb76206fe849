from __future__ import annotations

from typing import List

import pytest

from fixup_whitespace.host import Workspace
from fixup_whitespace.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.lines: List[tuple[str, str]] = []

    def debug(self, message: str) -> None:
        self.lines.append(("debug", message))

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    monkeypatch.setenv("FIXUP_WHITESPACE_LOG_LEVEL", "DEBUG")
    return logger


def test_format_kv_joins_pairs() -> None:
    assert telemetry.format_kv("event::x", {"a": 1, "b": [2]}) == (
        "event::x | a=1 | b=[2]"
    )


def test_record_event_respects_log_level(
    recorder: RecordingLogger, monkeypatch: pytest.MonkeyPatch
) -> None:
    telemetry.record_event("fixup.cursor_mismatch", data={"seen": 2})
    monkeypatch.setenv("FIXUP_WHITESPACE_LOG_LEVEL", "warning")
    telemetry.record_event("dropped", level="info")
    telemetry.record_event("kept", level="error")

    assert recorder.lines == [
        ("info", "event::fixup.cursor_mismatch | seen=2"),
        ("error", "event::kept"),
    ]


def test_unknown_levels_are_rejected(
    recorder: RecordingLogger, monkeypatch: pytest.MonkeyPatch
) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("x", level="loud")

    monkeypatch.setenv("FIXUP_WHITESPACE_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        telemetry.record_event("x")


def test_span_logs_metadata_and_component(recorder: RecordingLogger) -> None:
    with telemetry.span(
        "buffer::edit", component=True, metadata={"edits": 2}
    ) as handle:
        handle.add_metadata("dropped", 0)

    [(level, line)] = recorder.lines
    assert level == "debug"
    assert line.startswith("span::end | span=buffer::edit | outcome=ok | elapsed_ms=")
    assert line.endswith("| edits=2 | component=buffer::edit | dropped=0")


def test_span_marks_failures_and_reraises(recorder: RecordingLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("commands::execute", component="commands"):
            raise RuntimeError("boom")

    assert recorder.lines[0] == (
        "error",
        "span::fail | span=commands::execute | reason=boom",
    )
    assert "outcome=failed" in recorder.lines[1][1]
    assert "component=commands" in recorder.lines[1][1]


def test_workspace_logs_notifications_through_its_logger(
    recorder: RecordingLogger,
) -> None:
    workspace = Workspace()

    workspace.show_warning("fixup-whitespace: Unsupported edit: overlap")

    assert recorder.lines == [
        (
            "warning",
            "event::host.notify | text=fixup-whitespace: Unsupported edit: overlap",
        )
    ]
