"""Textual-facing adapter that turns key and mouse events into Editor calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from edit_engine.actions import ActionResult
from edit_engine.editor import DocumentIOError, Editor
from edit_engine.layout import pad_to_width, skip_columns


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[List[str], Tuple[int, int]], None]
    update_status: Callable[[str], None] = _noop
    update_title: Callable[[str], None] = _noop
    show_prompt: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class PromptState:
    """Single-line input shown while finding or choosing a save path."""

    kind: str
    fields: Dict[str, str] = field(default_factory=dict)
    active: str = ""

    @property
    def value(self) -> str:
        return self.fields.get(self.active, "")

    def render(self) -> str:
        parts = []
        for name, value in self.fields.items():
            marker = ">" if name == self.active else " "
            parts.append(f"{marker}{name}: {value}")
        return "  ".join(parts)


EditorCommand = Callable[[Editor], object]

EDIT_KEYS: Dict[str, EditorCommand] = {
    "enter": lambda editor: editor.insert_char("\n"),
    "backspace": lambda editor: editor.backspace(),
    "delete": lambda editor: editor.delete(),
    "tab": lambda editor: editor.indent(),
    "shift+tab": lambda editor: editor.dedent(),
    "backtab": lambda editor: editor.dedent(),
    "ctrl+a": lambda editor: editor.select_all(),
    "ctrl+c": lambda editor: editor.copy(),
    "ctrl+x": lambda editor: editor.cut(),
    "ctrl+v": lambda editor: editor.paste(),
    "ctrl+z": lambda editor: editor.undo(),
    "ctrl+y": lambda editor: editor.redo(),
    "ctrl+w": lambda editor: editor.toggle_word_wrap(),
}

MOTION_KEYS: Dict[str, Callable[[Editor, bool], ActionResult]] = {
    "left": Editor.move_left,
    "right": Editor.move_right,
    "up": Editor.move_up,
    "down": Editor.move_down,
}


class TextualEditorAdapter:
    """Bridges an :class:`Editor` to a Textual-friendly surface.

    The adapter owns no widgets: after each event it renders the visible
    rows as padded strings and hands them to ``hooks.update_view`` together
    with the caret's screen position.
    """

    def __init__(
        self, editor: Editor, hooks: TextualUIHooks, *, height: int = 24, width: int = 80
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.height = height
        self.width = width
        self.prompt: Optional[PromptState] = None
        self._message = ""
        self._refresh()

    # -- keyboard -------------------------------------------------------------

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Dispatch one Textual key; returns ``False`` when the key is unbound."""

        self.hooks.log(f"key -> {key!r} text={text!r}")
        if self.prompt is not None:
            handled = self._prompt_key(key, text)
        else:
            handled = self._editor_key(key, text)
        if handled:
            self._refresh()
        return handled

    def _editor_key(self, key: str, text: Optional[str]) -> bool:
        editor = self.editor
        if key.startswith("shift+") and key[len("shift+"):] in MOTION_KEYS:
            MOTION_KEYS[key[len("shift+"):]](editor, True)
        elif key in MOTION_KEYS:
            MOTION_KEYS[key](editor, False)
        elif key in EDIT_KEYS:
            outcome = EDIT_KEYS[key](editor)
            if key in {"ctrl+c", "ctrl+x"} and outcome is None:
                self._notify("nothing copied")
        elif key == "ctrl+s":
            self._save()
        elif key in {"ctrl+shift+s", "f12"}:
            self._open_prompt("save_as", path=editor.save_path_suggestion())
        elif key == "ctrl+f":
            self._open_prompt("find", find=editor.find.query, replace="")
        elif text and text.isprintable():
            for ch in text:
                editor.insert_char(ch)
        else:
            return False
        return True

    def _prompt_key(self, key: str, text: Optional[str]) -> bool:
        prompt = self.prompt
        assert prompt is not None
        editor = self.editor
        if key == "escape":
            self._close_prompt()
        elif key == "tab" and len(prompt.fields) > 1:
            names = list(prompt.fields)
            prompt.active = names[(names.index(prompt.active) + 1) % len(names)]
        elif key == "backspace":
            prompt.fields[prompt.active] = prompt.value[:-1]
            self._prompt_changed()
        elif key == "enter":
            self._prompt_submit()
        elif prompt.kind == "find" and key in {"shift+enter", "up"}:
            editor.find_previous()
        elif prompt.kind == "find" and key == "down":
            editor.find_next()
        elif prompt.kind == "find" and key == "ctrl+r":
            result = editor.replace_all(prompt.fields["find"], prompt.fields["replace"])
            self._notify(f"replaced {result.message or 0}")
        elif text and text.isprintable():
            prompt.fields[prompt.active] = prompt.value + text
            self._prompt_changed()
        else:
            return False
        self.hooks.show_prompt(self.prompt.render() if self.prompt else "")
        return True

    def _open_prompt(self, kind: str, **fields: str) -> None:
        self.prompt = PromptState(kind=kind, fields=dict(fields), active=next(iter(fields)))
        self.hooks.show_prompt(self.prompt.render())

    def _close_prompt(self) -> None:
        if self.prompt is not None and self.prompt.kind == "find":
            self.editor.clear_query()
        self.prompt = None
        self.hooks.show_prompt("")

    def _prompt_changed(self) -> None:
        prompt = self.prompt
        if prompt is not None and prompt.kind == "find" and prompt.active == "find":
            result = self.editor.set_query(prompt.value)
            self._notify(result.message or result.status)

    def _prompt_submit(self) -> None:
        prompt = self.prompt
        assert prompt is not None
        if prompt.kind == "save_as":
            if self._save(prompt.value):
                self._close_prompt()
        elif prompt.active == "replace":
            self.editor.replace_current(prompt.value)
        else:
            self.editor.find_next()

    def _save(self, path: Optional[str] = None) -> bool:
        editor = self.editor
        if path is None and editor.filename is None:
            self._open_prompt("save_as", path=editor.save_path_suggestion())
            return False
        try:
            target = editor.save_as(path) if path is not None else editor.save()
        except DocumentIOError as exc:
            self._notify(f"save failed: {exc}")
            return False
        self._notify(f"wrote {target}")
        return True

    # -- mouse ------------------------------------------------------------------

    def handle_mouse_down(self, row: int, col: int, *, shift: bool = False) -> None:
        self.editor.click(row, col, extend=shift)
        self._refresh(follow=False)

    def handle_mouse_move(self, row: int, col: int) -> None:
        if self.editor.dragging:
            self.editor.drag(row, col)
            self._refresh(follow=False)

    def handle_mouse_up(self) -> None:
        self.editor.release()
        self._refresh(follow=False)

    def handle_scroll(self, lines: int) -> None:
        self.editor.scroll(lines * self.editor.config.scroll_step)
        self._refresh(follow=False)

    # -- rendering --------------------------------------------------------------

    def resize(self, height: int, width: int) -> None:
        self.height = max(height, 1)
        self.width = max(width, 1)
        self._refresh()

    def render_lines(self) -> List[str]:
        """Visible rows as strings exactly ``width`` columns wide."""

        editor = self.editor
        left = editor.viewport.left
        out: List[str] = []
        for index, line in editor.visible_rows():
            if line is None:
                out.append(" " * self.width)
                continue
            text = " " * line.indent + editor.layout.row_text(index)
            out.append(pad_to_width(skip_columns(text, left), self.width))
        return out

    def status_line(self) -> str:
        line, col = self.editor.get_position()
        wrap = "wrap" if self.editor.word_wrap else "nowrap"
        return f"{self.editor.get_display_name()}  Ln {line}, Col {col}  {wrap}"

    def _refresh(self, *, follow: bool = True) -> None:
        editor = self.editor
        if follow:
            editor.update_viewport(self.height, self.width)
        else:
            editor.set_width(self.width)
        self.hooks.update_view(self.render_lines(), editor.caret_screen())
        self.hooks.update_title(editor.get_display_name())
        status = self.status_line()
        if self._message:
            status, self._message = f"{status}  {self._message}", ""
        self.hooks.update_status(status)

    def _notify(self, message: str) -> None:
        self._message = message
        self.hooks.log(message)


__all__ = ["PromptState", "TextualEditorAdapter", "TextualUIHooks"]
