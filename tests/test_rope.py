from __future__ import annotations

import pytest

from edit_engine.buffer.rope import LEAF_SIZE, Rope


def make_text(lines: int = 400) -> str:
    return "".join(f"line {n} é中\n" for n in range(lines))


def test_rope_round_trips_text_across_many_leaves() -> None:
    text = make_text()
    rope = Rope(text)

    assert len(text) > LEAF_SIZE * 4
    assert str(rope) == text
    assert rope.len_chars == len(text)
    assert rope.len_bytes == len(text.encode("utf-8"))
    assert rope.len_lines == text.count("\n") + 1


def test_rope_edits_match_plain_string_model() -> None:
    text = make_text()
    rope = Rope(text)
    edits = [(0, "start "), (1500, "middle\n"), (len(text) // 2, "中文"), (7, "")]
    for index, fragment in edits:
        rope.insert(index, fragment)
        text = text[:index] + fragment + text[index:]
    rope.remove(10, 2500)
    text = text[:10] + text[2500:]
    rope.remove(len(text) - 5, len(text))
    text = text[:-5]

    assert str(rope) == text
    assert rope.slice(3, 900) == text[3:900]
    assert rope.char(42) == text[42]


def test_rope_stays_shallow_under_repeated_typing() -> None:
    rope = Rope()
    for n in range(5000):
        rope.insert(rope.len_chars, "x" if n % 80 else "\n")

    assert rope.len_chars == 5000
    assert rope.depth < 20


def test_rope_byte_and_char_conversions() -> None:
    rope = Rope("aé中\nb")

    assert [rope.char_to_byte(i) for i in range(6)] == [0, 1, 3, 6, 7, 8]
    assert rope.byte_to_char(6) == 3
    with pytest.raises(ValueError):
        rope.byte_to_char(2)
    with pytest.raises(ValueError):
        rope.byte_to_char(99)


def test_rope_line_conversions() -> None:
    rope = Rope("ab\ncd\n")

    assert rope.len_lines == 3
    assert [rope.line_to_char(i) for i in range(4)] == [0, 3, 6, 6]
    assert rope.char_to_line(2) == 0
    assert rope.char_to_line(3) == 1
    assert rope.char_to_line(6) == 2
    with pytest.raises(IndexError):
        rope.line_to_char(5)
