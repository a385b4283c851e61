from __future__ import annotations

from typing import Optional

from edit_engine import Editor, EditorConfig
from edit_engine.buffer import ClipboardRegister


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class BrokenClipboard(ClipboardRegister):
    def clipboard_set(self, value: str) -> bool:
        del value
        return False


def make_editor(
    text: str = "",
    *,
    caret: int = 0,
    width: int = 80,
    clipboard: Optional[ClipboardRegister] = None,
) -> Editor:
    editor = Editor(text, clock=FakeClock(), width=width, clipboard=clipboard)
    editor.buffer.state.set_caret(caret)
    return editor


def test_typing_and_deleting_whole_characters() -> None:
    editor = make_editor("aé")
    editor.move_right()
    editor.move_right()
    assert editor.caret == 3

    editor.backspace()
    assert editor.text() == "a"
    assert editor.caret == 1
    assert editor.delete().status == "at_end"

    editor.insert_char("\n")
    editor.insert_char("b")
    assert editor.text() == "a\nb"
    assert editor.len_lines() == 2


def test_backspace_at_start_is_a_no_op() -> None:
    editor = make_editor("abc")

    result = editor.backspace()

    assert result.consumed is False
    assert editor.text() == "abc"
    assert editor.buffer.undo_timeline.can_undo() is False


def test_delete_removes_character_after_caret() -> None:
    editor = make_editor("abc", caret=1)

    editor.delete()

    assert editor.text() == "ac"
    assert editor.caret == 1


def test_extend_flag_anchors_selection_at_pre_move_caret() -> None:
    editor = make_editor("hello", caret=1)
    editor.move_right(extend=True)
    editor.move_right(extend=True)

    assert editor.selection() == (1, 3)
    assert editor.anchor == 1


def test_horizontal_move_collapses_selection_first() -> None:
    editor = make_editor("hello", caret=1)
    for _ in range(3):
        editor.move_right(extend=True)

    editor.move_left()
    assert editor.caret == 1
    assert editor.selection() is None

    for _ in range(3):
        editor.move_right(extend=True)
    editor.move_right()
    assert editor.caret == 4
    assert editor.selection() is None


def test_vertical_moves_keep_preferred_column() -> None:
    editor = make_editor("abcdef\nab\nabcdef", caret=5)

    editor.move_down()
    assert editor.caret == 9
    editor.move_down()
    assert editor.caret == 15
    editor.move_up()
    editor.move_up()
    assert editor.caret == 5


def test_vertical_moves_at_document_edges() -> None:
    editor = make_editor("one\ntwo", caret=2)

    editor.move_up()
    assert editor.caret == 0
    editor.move_down()
    editor.move_down()
    assert editor.caret == 7


def test_vertical_moves_walk_wrapped_rows() -> None:
    editor = make_editor("abcdefgh", caret=1, width=3)

    editor.move_down()
    assert editor.caret == 4
    editor.move_down()
    assert editor.caret == 7
    editor.move_up()
    assert editor.caret == 4


def test_typing_replaces_selection() -> None:
    editor = make_editor("hello world")
    for _ in range(5):
        editor.move_right(extend=True)

    editor.insert_char("J")

    assert editor.text() == "J world"
    assert editor.selection() is None


def test_indenting_two_lines_is_one_undo_unit() -> None:
    editor = make_editor("one\ntwo\nthree")
    editor.buffer.state.select(0, 5)

    editor.indent()

    assert editor.text() == "    one\n    two\nthree"
    assert editor.selection() == (4, 13)

    assert editor.undo() is True
    assert editor.text() == "one\ntwo\nthree"
    assert editor.caret == 5
    assert editor.anchor == 0
    assert editor.buffer.undo_timeline.can_undo() is False


def test_indent_without_selection_shifts_caret_line() -> None:
    editor = make_editor("a\nbc", caret=3)

    editor.indent()

    assert editor.text() == "a\n    bc"
    assert editor.caret == 7


def test_dedent_removes_up_to_one_indent_per_line() -> None:
    editor = make_editor("      x\n  y\nz")
    editor.select_all()

    editor.dedent()

    assert editor.text() == "  x\ny\nz"
    assert editor.selection() == (0, 7)
    editor.undo()
    assert editor.text() == "      x\n  y\nz"


def test_dedent_pulls_caret_out_of_removed_indent() -> None:
    editor = make_editor("    abc", caret=2)

    editor.dedent()

    assert editor.text() == "abc"
    assert editor.caret == 0


def test_dedent_without_leading_spaces_is_a_no_op() -> None:
    editor = make_editor("abc", caret=1)

    result = editor.dedent()

    assert result.status == "no_indent"
    assert editor.buffer.undo_timeline.can_undo() is False


def test_copy_cut_and_paste_round_trip() -> None:
    editor = make_editor("hello", caret=1)
    for _ in range(3):
        editor.move_right(extend=True)

    assert editor.copy() == "ell"
    assert editor.text() == "hello"
    assert editor.cut() == "ell"
    assert editor.text() == "ho"
    assert editor.caret == 1

    editor.paste()
    assert editor.text() == "hello"
    editor.paste("!")
    assert editor.text() == "hell!o"


def test_cut_aborts_when_clipboard_write_fails() -> None:
    editor = make_editor("hello", clipboard=BrokenClipboard())
    editor.select_all()

    assert editor.cut() is None
    assert editor.text() == "hello"
    assert editor.copy() is None


def test_copy_without_selection_returns_none() -> None:
    editor = make_editor("hello")

    assert editor.copy() is None


def test_position_and_display_name() -> None:
    editor = make_editor("aé\nxyz", caret=3)

    assert editor.get_position() == (1, 3)
    editor.move_down()
    assert editor.get_position() == (2, 3)
    assert editor.get_display_name() == "[No Name]"
    editor.insert_char("!")
    assert editor.get_display_name() == "[No Name]*"


def test_indent_width_comes_from_config() -> None:
    editor = Editor("x", config=EditorConfig(indent_width=2), clock=FakeClock())

    editor.indent()

    assert editor.text() == "  x"
