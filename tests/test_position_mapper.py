from __future__ import annotations

from edit_engine.buffer import BufferDocument
from edit_engine.layout import LayoutEngine, PositionMapper


def make_mapper(text: str, width: int = 80) -> PositionMapper:
    return PositionMapper(LayoutEngine(BufferDocument.from_text(text), width=width))


def test_positions_map_to_rows_and_columns() -> None:
    mapper = make_mapper("ab\ncd")

    assert mapper.byte_to_visual(0) == (2, 0)
    assert mapper.byte_to_visual(2) == (2, 2)
    assert mapper.byte_to_visual(3) == (3, 0)
    assert mapper.byte_to_visual(5) == (3, 2)


def test_wrap_point_belongs_to_continuation_row() -> None:
    mapper = make_mapper("abcdefgh", width=3)

    assert mapper.byte_to_visual(3) == (3, 0)
    assert mapper.visual_to_byte(2, 3) == 2
    assert mapper.visual_to_byte(2, 10) == 2
    assert mapper.visual_to_byte(4, 10) == 8


def test_continuation_columns_include_hanging_indent() -> None:
    mapper = make_mapper("- item one two", width=8)

    assert mapper.byte_to_visual(7) == (3, 4)
    assert mapper.byte_to_visual(12) == (4, 5)
    assert mapper.visual_to_byte(3, 1) == 7
    assert mapper.visual_to_byte(3, 6) == 9


def test_virtual_rows_clamp_to_document_edges() -> None:
    mapper = make_mapper("hello\nworld")

    assert mapper.visual_to_byte(0, 5) == 0
    assert mapper.visual_to_byte(1, 0) == 0
    assert mapper.visual_to_byte(99, 0) == 11


def test_wide_characters_use_display_columns() -> None:
    mapper = make_mapper("中文x")

    assert mapper.byte_to_visual(3) == (2, 2)
    assert mapper.byte_to_visual(6) == (2, 4)
    assert mapper.visual_to_byte(2, 1) == 0
    assert mapper.visual_to_byte(2, 2) == 3
    assert mapper.visual_to_byte(2, 5) == 7


def test_visible_positions_round_trip() -> None:
    text = "- first item wraps here\n  plain 中文 words\n\nend-of/text"
    mapper = make_mapper(text, width=9)
    layout = mapper.layout
    document = layout.document
    skipped = {
        pos
        for line in layout.rows
        if line is not None
        for pos in range(line.end_byte + 1, line.span_end)
    }

    pos = 0
    while True:
        if pos not in skipped:
            assert mapper.visual_to_byte(*mapper.byte_to_visual(pos)) == pos
        if pos == document.len_bytes:
            break
        pos = document.next_boundary(pos)


def test_caret_in_spaces_skipped_at_wrap_stays_on_row() -> None:
    mapper = make_mapper("abcdefgh    ijk", width=8)

    assert mapper.byte_to_visual(8) == (2, 8)
    assert mapper.byte_to_visual(10) == (2, 8)
    assert mapper.byte_to_visual(12) == (3, 0)
    assert all(mapper.byte_to_visual(pos)[1] <= 8 for pos in range(16))
