from __future__ import annotations

import pytest

from edit_engine import Editor, EditorConfig
from edit_engine.layout import Viewport


def make_editor(text: str, *, width: int = 80, height: int = 24, **config: object) -> Editor:
    return Editor(
        text,
        config=EditorConfig(**config),  # type: ignore[arg-type]
        clock=lambda: 0.0,
        width=width,
        height=height,
    )


def numbered_lines(count: int) -> str:
    return "\n".join(f"line {n}" for n in range(count))


def test_viewport_follows_caret_with_scrolloff() -> None:
    editor = make_editor(numbered_lines(50), height=10)
    editor.buffer.state.set_caret(editor.document.line_to_byte(20))

    top, left = editor.update_viewport(10, 80)

    assert (top, left) == (16, 0)
    assert editor.caret_screen() == (22 - 16, 0)


def test_viewport_scrolls_back_up_towards_caret() -> None:
    editor = make_editor(numbered_lines(50), height=10)
    editor.viewport.top = 30
    editor.buffer.state.set_caret(editor.document.line_to_byte(20))

    top, _ = editor.update_viewport(10, 80)

    assert top == 22 - 3


def test_scroll_is_clamped_to_rows() -> None:
    editor = make_editor(numbered_lines(50), height=10)
    total = len(editor.layout.rows)

    assert editor.scroll(1000) == total - 10
    assert editor.scroll(-1000) == 0


def test_scroll_short_document_stays_at_top() -> None:
    editor = make_editor("a\nb", height=10)

    assert editor.scroll(5) == 0


def test_visible_rows_include_virtual_padding() -> None:
    editor = make_editor("a\nb", height=10)

    rows = editor.visible_rows()

    assert [index for index, _ in rows] == list(range(6))
    assert [line is None for _, line in rows] == [True, True, False, False, True, True]


def test_horizontal_follow_without_wrap() -> None:
    editor = make_editor("x" * 100, width=20, word_wrap=False)
    editor.buffer.state.set_caret(100)

    top, left = editor.update_viewport(24, 20)

    assert left == 84
    assert editor.caret_screen()[1] == 16


def test_wrap_mode_keeps_left_at_zero() -> None:
    editor = make_editor("x" * 100, width=20)
    editor.buffer.state.set_caret(100)

    _, left = editor.update_viewport(24, 20)

    assert left == 0


def test_toggle_word_wrap_changes_row_count() -> None:
    editor = make_editor("abcdefgh", width=3)
    assert len(editor.layout.rows) == 3 + 4

    assert editor.toggle_word_wrap() is False
    assert len(editor.layout.rows) == 1 + 4
    assert editor.word_wrap is False


def test_click_drag_release_selects_range() -> None:
    editor = make_editor("hello\nworld")

    editor.click(3, 2)
    assert editor.caret == 8
    assert editor.dragging is True

    editor.drag(2, 1)
    assert editor.selection() == (1, 8)

    editor.release()
    assert editor.dragging is False
    assert editor.selection() == (1, 8)


def test_click_without_drag_leaves_no_selection() -> None:
    editor = make_editor("hello\nworld")

    editor.click(2, 3)
    editor.release()

    assert editor.caret == 3
    assert editor.selection() is None


def test_shift_click_extends_from_caret() -> None:
    editor = make_editor("hello\nworld")
    editor.buffer.state.set_caret(1)

    editor.click(3, 5, extend=True)
    editor.release()

    assert editor.selection() == (1, 11)


def test_click_past_line_end_lands_at_line_end() -> None:
    editor = make_editor("hi\nthere")

    editor.click(2, 40)

    assert editor.caret == 2


def test_click_on_virtual_row_keeps_caret() -> None:
    editor = make_editor("hello")
    editor.buffer.state.set_caret(2)

    result = editor.click(0, 0)

    assert result.consumed is False
    assert editor.caret == 2


def test_click_in_hanging_indent_goes_to_row_start() -> None:
    editor = make_editor("- item one two", width=8)

    editor.click(3, 0)

    assert editor.caret == 7


def test_drag_without_click_is_ignored() -> None:
    editor = make_editor("hello")

    assert editor.drag(2, 3).consumed is False
    assert editor.caret == 0


def test_click_accounts_for_scrolled_viewport() -> None:
    editor = make_editor(numbered_lines(50), height=10)
    editor.scroll(10)

    editor.click(0, 0)

    assert editor.caret == editor.document.line_to_byte(8)


def test_viewport_resize_floors_at_one() -> None:
    viewport = Viewport()

    viewport.resize(0, -5)

    assert (viewport.height, viewport.width) == (1, 1)


def test_config_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("WORD_WRAP", "SCROLLOFF", "COALESCE_MS", "INDENT_WIDTH"):
        monkeypatch.delenv(f"EDIT_ENGINE_{name}", raising=False)

    assert EditorConfig.from_env() == EditorConfig()


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDIT_ENGINE_WORD_WRAP", "off")
    monkeypatch.setenv("EDIT_ENGINE_SCROLLOFF", "-2")
    monkeypatch.setenv("EDIT_ENGINE_COALESCE_MS", "250")
    monkeypatch.setenv("EDIT_ENGINE_INDENT_WIDTH", "0")

    config = EditorConfig.from_env()

    assert config.word_wrap is False
    assert config.scrolloff == 0
    assert config.coalesce_window == 0.25
    assert config.indent_width == 1


def test_config_ignores_malformed_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDIT_ENGINE_SCROLLOFF", "lots")

    assert EditorConfig.from_env().scrolloff == 3


def test_follow_in_short_pane_is_stable() -> None:
    viewport = Viewport(height=5, scrolloff=3)

    tops = []
    for _ in range(4):
        viewport.follow(10, 0, horizontal=False)
        tops.append(viewport.top)

    assert tops == [8, 8, 8, 8]


def test_plain_click_leaves_no_anchor_for_motion() -> None:
    editor = make_editor("hello\nworld")

    editor.click(2, 1)
    editor.move_right()

    assert editor.anchor is None
    assert editor.caret == 2


def test_drag_back_to_click_point_leaves_no_selection() -> None:
    editor = make_editor("hello\nworld")

    editor.click(2, 1)
    editor.drag(2, 4)
    editor.drag(2, 1)
    editor.release()

    assert editor.selection() is None
    assert editor.caret == 1
