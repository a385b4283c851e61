"""The editor façade: one document, its layout, history and find state."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from edit_engine import actions
from edit_engine.actions import ActionResult, EditContext
from edit_engine.buffer import Buffer, BufferDocument, ClipboardRegister, UndoTimeline
from edit_engine.config import EditorConfig
from edit_engine.find import FindState
from edit_engine.layout import LayoutEngine, Viewport, VisualLine
from edit_engine.runtime import telemetry

PathLike = Union[str, "os.PathLike[str]"]
NO_NAME = "[No Name]"


class DocumentIOError(OSError):
    """Loading or saving the document failed; editor state is untouched."""


class Editor:
    """Operation vocabulary a host dispatcher drives.

    Every method is synchronous and leaves the editor consistent. Layout is
    rebuilt lazily, only when a query needs it after the text, the width or
    the wrap mode changed.
    """

    def __init__(
        self,
        text: str = "",
        *,
        config: Optional[EditorConfig] = None,
        clipboard: Optional[ClipboardRegister] = None,
        clock: Optional[Callable[[], float]] = None,
        width: int = 80,
        height: int = 24,
    ) -> None:
        self.config = config or EditorConfig()
        undo = UndoTimeline(
            window=self.config.coalesce_window, clock=clock or time.monotonic
        )
        self.buffer = Buffer(
            document=BufferDocument.from_text(text), clipboard=clipboard, undo=undo
        )
        self.layout = LayoutEngine(
            self.buffer.document,
            width=width,
            word_wrap=self.config.word_wrap,
            virtual_lines=self.config.virtual_lines,
        )
        self.context = EditContext(
            buffer=self.buffer, layout=self.layout, indent_width=self.config.indent_width
        )
        self.viewport = Viewport(height=height, width=width, scrolloff=self.config.scrolloff)
        self.filename: Optional[Path] = None
        self.current_dir = Path.cwd()
        self.dragging = False

    # -- read-only queries ---------------------------------------------------

    @property
    def document(self) -> BufferDocument:
        return self.buffer.document

    @property
    def find(self) -> FindState:
        return self.context.find

    @property
    def caret(self) -> int:
        return self.buffer.caret

    @property
    def anchor(self) -> Optional[int]:
        return self.buffer.state.anchor

    @property
    def modified(self) -> bool:
        return self.buffer.modified

    @property
    def word_wrap(self) -> bool:
        return self.layout.word_wrap

    def text(self) -> str:
        return self.buffer.text()

    def selection(self) -> Optional[Tuple[int, int]]:
        return self.buffer.selection_range()

    def len_lines(self) -> int:
        return self.document.line_count

    def get_position(self) -> Tuple[int, int]:
        """1-based ``(line, column)`` of the caret, counting characters."""

        document = self.document
        line = document.byte_to_line(self.caret)
        line_start = document.byte_to_char(document.line_to_byte(line))
        return line + 1, document.byte_to_char(self.caret) - line_start + 1

    def get_display_name(self) -> str:
        name = self.filename.name if self.filename is not None else NO_NAME
        return f"{name}*" if self.modified else name

    def caret_visual(self) -> Tuple[int, int]:
        return self.context.mapper.byte_to_visual(self.caret)

    def caret_screen(self) -> Tuple[int, int]:
        row, col = self.caret_visual()
        return row - self.viewport.top, col - self.viewport.left

    def visible_rows(self) -> List[Tuple[int, Optional[VisualLine]]]:
        """``(row index, line)`` pairs inside the viewport, virtual rows as ``None``."""

        rows = self.layout.rows
        return [(index, rows[index]) for index in self.viewport.visible(len(rows))]

    # -- dispatch helper ------------------------------------------------------

    def _run(self, result: ActionResult) -> ActionResult:
        if result.mutated:
            self._refresh_find()
        return result

    def _refresh_find(self) -> None:
        if self.find.active:
            self.find.refresh(self.document, self.caret)

    # -- editing --------------------------------------------------------------

    def insert_char(self, ch: str) -> ActionResult:
        return self._run(actions.insert_char(self.context, ch))

    def delete(self) -> ActionResult:
        return self._run(actions.delete(self.context))

    def backspace(self) -> ActionResult:
        return self._run(actions.backspace(self.context))

    def indent(self) -> ActionResult:
        return self._run(actions.indent(self.context))

    def dedent(self) -> ActionResult:
        return self._run(actions.dedent(self.context))

    def select_all(self) -> ActionResult:
        return actions.select_all(self.context)

    def copy(self) -> Optional[str]:
        return actions.copy(self.context)

    def cut(self) -> Optional[str]:
        text = actions.cut(self.context)
        if text is not None:
            self._refresh_find()
        return text

    def paste(self, text: Optional[str] = None) -> ActionResult:
        return self._run(actions.paste(self.context, text))

    def undo(self) -> bool:
        if not self.buffer.undo():
            return False
        self._refresh_find()
        return True

    def redo(self) -> bool:
        if not self.buffer.redo():
            return False
        self._refresh_find()
        return True

    # -- motion ---------------------------------------------------------------

    def move_left(self, extend: bool = False) -> ActionResult:
        return actions.move_left(self.context, extend)

    def move_right(self, extend: bool = False) -> ActionResult:
        return actions.move_right(self.context, extend)

    def move_up(self, extend: bool = False) -> ActionResult:
        return actions.move_up(self.context, extend)

    def move_down(self, extend: bool = False) -> ActionResult:
        return actions.move_down(self.context, extend)

    # -- find / replace -------------------------------------------------------

    def set_query(self, query: str) -> ActionResult:
        return actions.set_query(self.context, query)

    def clear_query(self) -> None:
        self.find.clear()

    def find_next(self) -> ActionResult:
        return actions.find_next(self.context)

    def find_previous(self) -> ActionResult:
        return actions.find_previous(self.context)

    def replace_current(self, replacement: str) -> ActionResult:
        return actions.replace_current(self.context, replacement)

    def replace_all(self, query: str, replacement: str) -> ActionResult:
        return actions.replace_all(self.context, query, replacement)

    # -- viewport and mouse ---------------------------------------------------

    def set_width(self, width: int) -> None:
        self.layout.set_width(width)
        self.viewport.resize(self.viewport.height, width)

    def toggle_word_wrap(self) -> bool:
        wrap = self.layout.toggle_word_wrap()
        self.viewport.left = 0
        telemetry.record_event("editor.word_wrap", data={"enabled": wrap})
        return wrap

    def update_viewport(self, height: int, width: int) -> Tuple[int, int]:
        """Resize, then scroll so the caret keeps its scroll-off margin."""

        self.set_width(width)
        self.viewport.resize(height, width)
        row, col = self.caret_visual()
        self.viewport.follow(row, col, horizontal=not self.word_wrap)
        return self.viewport.top, self.viewport.left

    def click(self, screen_row: int, screen_col: int, *, extend: bool = False) -> ActionResult:
        """Place the caret under the pointer and start a drag.

        The selection anchor is dropped by the first :meth:`drag`, at the
        caret the click left behind.
        """

        row, col = self.viewport.to_absolute(screen_row, screen_col)
        result = actions.place_caret(self.context, row, col, extend=extend)
        self.dragging = True
        return result

    def drag(self, screen_row: int, screen_col: int) -> ActionResult:
        if not self.dragging:
            return ActionResult(consumed=False, status="not_dragging")
        row, col = self.viewport.to_absolute(screen_row, screen_col)
        return actions.place_caret(self.context, row, col, extend=True)

    def release(self) -> None:
        self.dragging = False
        if self.buffer.state.anchor == self.caret:
            self.buffer.state.clear_selection()

    def scroll(self, lines: int) -> int:
        return self.viewport.scroll(lines, len(self.layout.rows))

    # -- files ----------------------------------------------------------------

    def open(self, path: PathLike) -> bool:
        """Adopt ``path`` as the filename, loading it when it exists."""

        target = Path(path)
        if not target.exists():
            self.filename = target
            self.current_dir = target.parent
            return False
        self.load(target)
        return True

    def load(self, path: PathLike) -> None:
        target = Path(path)
        with telemetry.span("editor::load", component="editor", metadata={"path": str(target)}):
            try:
                text = target.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise DocumentIOError(f"cannot load {target}: {exc}") from exc
            self.buffer.load_text(text)
            self.filename = target
            self.current_dir = target.parent
            self.viewport.top = self.viewport.left = 0
            self._refresh_find()
        telemetry.record_event(
            "editor.load", data={"path": str(target), "bytes": self.document.len_bytes}
        )

    def save(self) -> Path:
        if self.filename is None:
            raise DocumentIOError("no filename to save to")
        return self._write(self.filename)

    def save_as(self, path: PathLike) -> Path:
        target = self._write(Path(path))
        self.filename = target
        return target

    def save_path_suggestion(self) -> str:
        if self.filename is not None:
            return str(self.filename)
        return os.path.join(str(self.current_dir), "")

    def _write(self, target: Path) -> Path:
        with telemetry.span("editor::save", component="editor", metadata={"path": str(target)}):
            try:
                target.write_bytes(self.text().encode("utf-8"))
            except OSError as exc:
                raise DocumentIOError(f"cannot save {target}: {exc}") from exc
            self.buffer.modified = False
        telemetry.record_event(
            "editor.save", data={"path": str(target), "bytes": self.document.len_bytes}
        )
        return target


__all__ = ["DocumentIOError", "Editor", "NO_NAME"]
