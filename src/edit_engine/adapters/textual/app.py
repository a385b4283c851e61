"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widget import Widget
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edit_engine.adapters.textual.app"
    ) from exc

from edit_engine.config import EditorConfig
from edit_engine.editor import DocumentIOError, Editor
from edit_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

WHEEL_LINES = 1


class EditorView(Widget, can_focus=True):
    """Paints the rows the adapter rendered and forwards mouse input."""

    def __init__(self, *, id: Optional[str] = None) -> None:
        super().__init__(id=id)
        self.lines: List[str] = []
        self.caret: Tuple[int, int] = (0, 0)
        self.adapter: Optional[TextualEditorAdapter] = None

    def show(self, lines: List[str], caret: Tuple[int, int]) -> None:
        self.lines = lines
        self.caret = caret
        self.refresh()

    def render(self) -> Text:
        result = Text(no_wrap=True)
        caret_row, caret_col = self.caret
        for index, line in enumerate(self.lines):
            text = Text(line)
            if index == caret_row and 0 <= caret_col < len(line):
                text.stylize("reverse", caret_col, caret_col + 1)
            elif index == caret_row and caret_col >= 0:
                text.append(" ", style="reverse")
            result.append_text(text)
            if index + 1 < len(self.lines):
                result.append("\n")
        return result

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter is not None:
            self.adapter.resize(event.size.height, event.size.width)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.adapter is not None:
            self.capture_mouse()
            self.adapter.handle_mouse_down(event.y, event.x, shift=event.shift)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self.adapter is not None and event.button:
            self.adapter.handle_mouse_move(event.y, event.x)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        del event
        if self.adapter is not None:
            self.release_mouse()
            self.adapter.handle_mouse_up()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        del event
        if self.adapter is not None:
            self.adapter.handle_scroll(WHEEL_LINES)

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        del event
        if self.adapter is not None:
            self.adapter.handle_scroll(-WHEEL_LINES)


class EditorApp(App[None]):
    """Minimal Textual UI embedding the editing engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-view {
		height: 1fr;
	}

	#prompt-line {
		height: auto;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, path: Optional[str] = None, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.editor = Editor(config=config or EditorConfig.from_env())
        self._path = path
        self.adapter: Optional[TextualEditorAdapter] = None
        self._view: Optional[EditorView] = None
        self._status_widget: Optional[Static] = None
        self._prompt_widget: Optional[Static] = None

    def compose(self) -> ComposeResult:
        self._view = EditorView(id="editor-view")
        self._prompt_widget = Static("", id="prompt-line", markup=False)
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._view
        yield self._prompt_widget
        yield self._status_widget

    def on_mount(self) -> None:
        status = ""
        if self._path is not None:
            try:
                loaded = self.editor.open(self._path)
            except DocumentIOError as exc:
                status = str(exc)
            else:
                status = "" if loaded else f"new file {self._path}"
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            update_title=self._update_title,
            show_prompt=self._show_prompt,
            log=self._log_line,
        )
        assert self._view is not None
        size = self._view.size
        self.adapter = TextualEditorAdapter(
            self.editor, hooks, height=size.height or 24, width=size.width or 80
        )
        self._view.adapter = self.adapter
        self._view.focus()
        if status:
            self._update_status(status)

    async def on_key(self, event: events.Key) -> None:
        if self.adapter is None or event.key == "ctrl+q":
            return
        if self.adapter.handle_textual_key(event.key, text=event.character):
            event.stop()
            event.prevent_default()

    def _update_view(self, lines: List[str], caret: Tuple[int, int]) -> None:
        if self._view is not None:
            self._view.show(lines, caret)

    def _update_status(self, status: str) -> None:
        if self._status_widget is not None:
            self._status_widget.update(status)

    def _update_title(self, title: str) -> None:
        self.title = title

    def _show_prompt(self, text: str) -> None:
        if self._prompt_widget is not None:
            self._prompt_widget.update(text)
            self._prompt_widget.display = bool(text)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("textual.log", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the edit-engine Textual editor.")
    parser.add_argument("path", nargs="?", help="File to open (created on first save)")
    parser.add_argument(
        "--no-wrap",
        action="store_true",
        help="Start with word wrap disabled",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default="production",
        help="Telemetry preset (default: production, which logs to a file)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    config = EditorConfig.from_env()
    if args.no_wrap:
        config.word_wrap = False
    EditorApp(path=args.path, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
