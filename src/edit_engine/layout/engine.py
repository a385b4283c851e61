"""Visual-line layout of a document for a given viewport width."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from edit_engine.buffer.document import BufferDocument
from edit_engine.runtime import telemetry

from .wrap import continuation_indent, wrap_segments

DEFAULT_VIRTUAL_LINES = 2


@dataclass(frozen=True, slots=True)
class VisualLine:
    """One screen row: bytes ``[start_byte, end_byte)`` of the document.

    ``span_end`` is where the next row's bytes begin. It differs from
    ``end_byte`` by the terminating newline and by spaces swallowed at a wrap
    point, so the spans of all rows tile the document with no gaps.
    """

    start_byte: int
    end_byte: int
    span_end: int
    is_continuation: bool = False
    indent: int = 0
    logical_line: int = 0


class LayoutEngine:
    """Lazily rebuilt list of visual rows, padded with virtual rows.

    ``rows`` holds ``None`` for the virtual rows above and below the content.
    The cache is keyed on the document version, the width and the wrap flag,
    so cursor motion never triggers a rebuild.
    """

    def __init__(
        self,
        document: BufferDocument,
        *,
        width: int = 80,
        word_wrap: bool = True,
        virtual_lines: int = DEFAULT_VIRTUAL_LINES,
    ) -> None:
        self.document = document
        self.width = max(width, 1)
        self.word_wrap = word_wrap
        self.virtual_lines = virtual_lines
        self._rows: List[Optional[VisualLine]] = []
        self._starts: List[int] = []
        self._line_rows: List[Tuple[int, int]] = []
        self._key: Optional[Tuple[int, int, bool]] = None

    # -- cache control ------------------------------------------------------

    def _cache_key(self) -> Tuple[int, int, bool]:
        return (self.document.version, self.width, self.word_wrap)

    @property
    def dirty(self) -> bool:
        return self._key != self._cache_key()

    def invalidate(self) -> None:
        self._key = None

    def ensure(self) -> List[Optional[VisualLine]]:
        if self.dirty:
            self.rebuild()
        return self._rows

    def set_width(self, width: int) -> None:
        self.width = max(width, 1)

    def toggle_word_wrap(self) -> bool:
        self.word_wrap = not self.word_wrap
        return self.word_wrap

    # -- queries ------------------------------------------------------------

    @property
    def rows(self) -> List[Optional[VisualLine]]:
        return self.ensure()

    @property
    def row_starts(self) -> List[int]:
        """``start_byte`` of every content row, strictly increasing."""

        self.ensure()
        return self._starts

    @property
    def first_content_row(self) -> int:
        return self.virtual_lines

    @property
    def last_content_row(self) -> int:
        return self.virtual_lines + len(self.row_starts) - 1

    def __len__(self) -> int:
        return len(self.ensure())

    def row(self, index: int) -> Optional[VisualLine]:
        rows = self.ensure()
        if 0 <= index < len(rows):
            return rows[index]
        return None

    def rows_for_line(self, logical_line: int) -> range:
        """Row indices covering ``logical_line``."""

        self.ensure()
        first, count = self._line_rows[logical_line]
        return range(first, first + count)

    def row_text(self, index: int) -> str:
        line = self.row(index)
        if line is None:
            return ""
        return self.document.slice(line.start_byte, line.end_byte)

    # -- rebuild ------------------------------------------------------------

    @telemetry.timed("layout::rebuild", component="layout")
    def rebuild(self) -> List[Optional[VisualLine]]:
        rows: List[Optional[VisualLine]] = [None] * self.virtual_lines
        line_rows: List[Tuple[int, int]] = []
        lines = self.document.text().split("\n")
        offset = 0
        for number, content in enumerate(lines):
            line_end = offset + len(content.encode("utf-8"))
            span_end = line_end + (1 if number + 1 < len(lines) else 0)
            first = len(rows)
            if not self.word_wrap or not content:
                rows.append(VisualLine(offset, line_end, span_end, logical_line=number))
            else:
                rows.extend(self._wrap_line(content, offset, span_end, number))
            line_rows.append((first, len(rows) - first))
            offset = span_end
        rows.extend([None] * self.virtual_lines)

        self._rows = rows
        self._line_rows = line_rows
        self._starts = [line.start_byte for line in rows if line is not None]
        self._key = self._cache_key()
        return rows

    def _wrap_line(
        self, content: str, offset: int, span_end: int, number: int
    ) -> List[VisualLine]:
        indent = continuation_indent(content)
        segments = wrap_segments(content, self.width, indent)
        out: List[VisualLine] = []
        for index, segment in enumerate(segments):
            last = index == len(segments) - 1
            out.append(
                VisualLine(
                    start_byte=offset + segment.start,
                    end_byte=offset + segment.end,
                    span_end=span_end if last else offset + segment.next_start,
                    is_continuation=index > 0,
                    indent=indent if index > 0 else 0,
                    logical_line=number,
                )
            )
        return out


__all__ = ["DEFAULT_VIRTUAL_LINES", "LayoutEngine", "VisualLine"]
