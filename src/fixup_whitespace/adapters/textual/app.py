"""Executable Textual app for trying fixup-whitespace interactively."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use fixup_whitespace.adapters.textual.app"
    ) from exc

from fixup_whitespace.buffer import BufferMirror
from fixup_whitespace.host import Workspace

from .controller import TextualFixupAdapter, TextualUIHooks

SAMPLE_TEXT = "\n".join(
    [
        "There is too much            space here.",
        "There is spacemissing here.",
        "      This has space before it.",
        "This has space after it.       ",
    ]
)

HELP_TEXT = (
    "arrows move | ctrl+down add cursor | esc one cursor | "
    "alt+space fixup | ctrl+z undo | ctrl+y redo"
)


def render_buffer(mirror: BufferMirror) -> Text:
    """Render ``mirror`` with every cursor cell highlighted."""

    carets: dict[int, set[int]] = {}
    for selection in mirror.selections:
        carets.setdefault(selection.active.line, set()).add(selection.active.column)

    rendered = Text()
    for row, line in enumerate(mirror.lines):
        # Pad one cell so a cursor at the line end stays visible.
        cells = Text(line.replace("\t", "→") + " ")
        for column in carets.get(row, ()):
            cells.stylize("reverse", column, column + 1)
        if row:
            rendered.append("\n")
        rendered.append_text(cells)
    return rendered


class FixupApp(App[None]):
    """Minimal Textual UI hosting one buffer with multiple cursors."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = SAMPLE_TEXT, name: str = "scratch") -> None:
        super().__init__()
        self.workspace = Workspace()
        self.workspace.open_buffer(name, text)
        self.adapter: TextualFixupAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static(HELP_TEXT, id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
        )
        self.adapter = TextualFixupAdapter(self.workspace, hooks)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        status = await self.adapter.handle_textual_key(event.key)
        if status != "unbound":
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_buffer(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Try fixup-whitespace on a file in a Textual editor."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=os.environ.get("FIXUP_WHITESPACE_FILE"),
        help="Text file to load (default: built-in sample)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.path:
        path = Path(args.path)
        app = FixupApp(text=path.read_text(encoding="utf-8"), name=path.name)
    else:
        app = FixupApp()
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
