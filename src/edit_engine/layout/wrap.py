"""Greedy word wrap of one logical line and the list-aware hanging indent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .width import char_width, text_width

LIST_INDENT = 4
BULLETS = ("- ", "* ", "+ ")
SOFT_BREAKS = frozenset(" -/")


def continuation_indent(line: str) -> int:
    """Display columns to pad continuation rows of ``line`` with.

    Leading whitespace width, plus :data:`LIST_INDENT` when the rest of the
    line starts with a bullet (``- ``, ``* ``, ``+ ``) or an ordered-list
    marker: an alphanumeric run followed by ``.`` or ``)`` and a space.
    """

    trimmed = line.lstrip()
    base = text_width(line[: len(line) - len(trimmed)])
    if trimmed.startswith(BULLETS):
        return base + LIST_INDENT
    run = 0
    for index, ch in enumerate(trimmed):
        if ch.isalnum():
            run += 1
            continue
        if run and ch in ".)" and trimmed[index + 1 : index + 2] == " ":
            return base + LIST_INDENT
        break
    return base


@dataclass(frozen=True, slots=True)
class Segment:
    """Byte offsets relative to the start of the wrapped line.

    ``end`` is where the row's rendered text stops; ``next_start`` is where the
    following row begins, past any spaces swallowed at the wrap point.
    """

    start: int
    end: int
    next_start: int


def wrap_segments(content: str, width: int, indent: int = 0) -> List[Segment]:
    """Split ``content`` (no newline) into rows at most ``width`` columns wide.

    The first row may use the full width, continuation rows ``width - indent``
    (never less than one column). A row breaks after the last space, hyphen
    or slash that fits, otherwise right before the overflowing character. A
    character wider than the row still takes a row of its own.
    """

    width = max(width, 1)
    chars = [(ch, len(ch.encode("utf-8")), char_width(ch)) for ch in content]
    total = sum(size for _, size, _ in chars)
    if total == 0:
        return [Segment(0, 0, 0)]

    segments: List[Segment] = []
    i = 0
    pos = 0
    while i < len(chars):
        available = width if not segments else max(width - indent, 1)
        used = 0
        start = pos
        break_at = None  # (char index, byte offset) just after a soft break
        j, end = i, pos
        while j < len(chars):
            ch, size, w = chars[j]
            if used + w > available and j > i:
                if break_at is not None:
                    j, end = break_at
                break
            used += w
            end += size
            j += 1
            if ch in SOFT_BREAKS:
                break_at = (j, end)
        next_i, next_pos = j, end
        while next_i < len(chars) and chars[next_i][0] == " ":
            next_pos += chars[next_i][1]
            next_i += 1
        segments.append(Segment(start, end, next_pos))
        i, pos = next_i, next_pos
    return segments


__all__ = ["BULLETS", "LIST_INDENT", "Segment", "continuation_indent", "wrap_segments"]
