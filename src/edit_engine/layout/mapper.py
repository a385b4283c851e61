"""Conversion between byte offsets and (visual row, display column)."""

from __future__ import annotations

from bisect import bisect_right
from typing import Tuple

from .engine import LayoutEngine
from .width import char_width, text_width

VisualPos = Tuple[int, int]


class PositionMapper:
    """Maps caret offsets onto the rows produced by a :class:`LayoutEngine`."""

    def __init__(self, layout: LayoutEngine) -> None:
        self.layout = layout

    @property
    def document(self):
        return self.layout.document

    def byte_to_visual(self, pos: int) -> VisualPos:
        """Row and display column at which the caret for ``pos`` is drawn.

        A position where a continuation row begins belongs to that row, so
        the caret shows at the start of the wrapped remainder rather than
        past the end of the previous segment.
        """

        layout = self.layout
        starts = layout.row_starts
        index = max(bisect_right(starts, pos) - 1, 0)
        row = layout.first_content_row + index
        line = layout.rows[row]
        assert line is not None
        # spaces swallowed at a wrap point draw at the end of the row
        end = min(pos, line.end_byte)
        col = line.indent + text_width(self.document.slice(line.start_byte, end))
        return row, col

    def visual_to_byte(self, row: int, col: int) -> int:
        """Byte offset nearest to display column ``col`` on ``row``.

        The walk stops before the character that would carry the width past
        the target, and never lands on a position that :meth:`byte_to_visual`
        would place on a different row.
        """

        layout = self.layout
        if row < layout.first_content_row:
            return 0
        if row > layout.last_content_row:
            return self.document.len_bytes
        line = layout.rows[row]
        assert line is not None
        if line.is_continuation and col < line.indent:
            return line.start_byte

        target = max(col - line.indent, 0)
        pos = line.start_byte
        used = 0
        for ch in self.document.slice(line.start_byte, line.end_byte):
            w = char_width(ch)
            if used + w > target:
                break
            used += w
            pos += len(ch.encode("utf-8"))

        if pos == line.end_byte and pos > line.start_byte and self._continues_at(row, pos):
            pos = self.document.prev_boundary(pos)
        return pos

    def _continues_at(self, row: int, pos: int) -> bool:
        following = self.layout.row(row + 1)
        return (
            following is not None
            and following.is_continuation
            and following.start_byte == pos
        )


__all__ = ["PositionMapper", "VisualPos"]
