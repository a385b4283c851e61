from __future__ import annotations

from typing import List

import pytest

from edit_engine.buffer import BufferDocument
from edit_engine.layout import (
    LayoutEngine,
    VisualLine,
    continuation_indent,
    skip_columns,
    text_width,
    wrap_segments,
)

SAMPLE = (
    "Plain words that need wrapping at narrow widths.\n"
    "\n"
    "- a bullet item whose text runs past the edge\n"
    "    12. numbered entry with a-hyphenated/slashed word\n"
    "中文字符混合 text and  double  spaces\n"
    "trailing"
)


def make_layout(text: str, width: int = 20, *, word_wrap: bool = True) -> LayoutEngine:
    return LayoutEngine(BufferDocument.from_text(text), width=width, word_wrap=word_wrap)


def content_rows(layout: LayoutEngine) -> List[VisualLine]:
    return [line for line in layout.rows if line is not None]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("- item", 4),
        ("  * nested", 6),
        ("+ plus", 4),
        ("12. twelve", 4),
        ("b) letter", 4),
        ("    code", 4),
        ("plain text", 0),
        ("-dash", 0),
        ("1.5 ratio", 0),
    ],
)
def test_continuation_indent_recognises_list_markers(line: str, expected: int) -> None:
    assert continuation_indent(line) == expected


def test_wrap_breaks_after_last_soft_break() -> None:
    segments = wrap_segments("hello world foo", 11)

    assert [(s.start, s.end, s.next_start) for s in segments] == [(0, 6, 6), (6, 15, 15)]


def test_wrap_hard_breaks_words_without_soft_break() -> None:
    segments = wrap_segments("abcdefgh", 3)

    assert [(s.start, s.end) for s in segments] == [(0, 3), (3, 6), (6, 8)]


def test_wrap_skips_extra_spaces_at_break() -> None:
    segments = wrap_segments("aaaa  bbbb", 5)

    assert [(s.start, s.end, s.next_start) for s in segments] == [(0, 5, 6), (6, 10, 10)]


def test_wrap_keeps_character_wider_than_row() -> None:
    segments = wrap_segments("中a", 1)

    assert [(s.start, s.end) for s in segments] == [(0, 3), (3, 4)]


def test_wrap_with_indent_wider_than_viewport_still_advances() -> None:
    segments = wrap_segments("abcdef", 3, indent=5)

    assert [(s.start, s.end) for s in segments] == [(0, 3), (3, 4), (4, 5), (5, 6)]


def test_layout_pads_content_with_virtual_rows() -> None:
    layout = make_layout("one\ntwo")
    rows = layout.rows

    assert rows[:2] == [None, None]
    assert rows[-2:] == [None, None]
    assert layout.first_content_row == 2
    assert layout.last_content_row == 3
    assert len(layout) == 6


def test_empty_document_has_single_empty_row() -> None:
    layout = make_layout("")

    assert content_rows(layout) == [VisualLine(0, 0, 0)]


def test_list_item_continuations_carry_hanging_indent() -> None:
    layout = make_layout("- item one two", width=8)
    rows = content_rows(layout)

    assert [(r.start_byte, r.end_byte) for r in rows] == [(0, 7), (7, 11), (11, 14)]
    assert [r.is_continuation for r in rows] == [False, True, True]
    assert [r.indent for r in rows] == [0, 4, 4]
    assert list(layout.rows_for_line(0)) == [2, 3, 4]


def test_without_word_wrap_each_logical_line_is_one_row() -> None:
    layout = make_layout("abc\n\ndef", width=2, word_wrap=False)
    rows = content_rows(layout)

    assert [(r.start_byte, r.end_byte, r.span_end) for r in rows] == [
        (0, 3, 4),
        (4, 4, 5),
        (5, 8, 8),
    ]
    assert [r.logical_line for r in rows] == [0, 1, 2]


@pytest.mark.parametrize("width", [1, 2, 3, 5, 8, 13, 21, 34, 80])
def test_row_spans_tile_document_and_respect_width(width: int) -> None:
    layout = make_layout(SAMPLE, width=width)
    document = layout.document
    rows = content_rows(layout)

    assert "".join(document.slice(r.start_byte, r.span_end) for r in rows) == SAMPLE
    starts = [r.start_byte for r in rows]
    assert starts == sorted(set(starts))
    for row in rows:
        text = document.slice(row.start_byte, row.end_byte)
        available = width if not row.is_continuation else max(width - row.indent, 1)
        assert text_width(text) <= available or len(text) == 1


def test_cache_tracks_document_width_and_wrap_changes() -> None:
    layout = make_layout("some text here", width=5)
    first = layout.rows
    assert layout.dirty is False
    assert layout.rows is first

    layout.document.insert(0, "x")
    assert layout.dirty is True
    layout.ensure()
    layout.set_width(40)
    assert layout.dirty is True
    assert len(content_rows(layout)) == 1
    assert layout.toggle_word_wrap() is False
    assert layout.dirty is True


def test_skip_columns_counts_display_width() -> None:
    assert skip_columns("abc", 0) == "abc"
    assert skip_columns("abc", 2) == "c"
    assert skip_columns("abc", 5) == ""
    assert skip_columns("\t\tab", 4) == "\tab"
    assert skip_columns("\tab", 2) == "  ab"
    assert skip_columns("中x", 1) == " x"
