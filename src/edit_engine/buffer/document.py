"""Byte-addressed text storage for edit_engine buffers."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .rope import Rope
from .sync import BufferValidationError
from .validation import ensure_offset, ensure_range

Match = Tuple[int, int]


class BufferDocument:
    """Rope-backed document addressed by UTF-8 byte offsets.

    Character and line coordinates are available through conversions, but
    every offset handed out or accepted is a byte offset on a code-point
    boundary. ``version`` increases on every mutation so derived caches can
    tell when they are stale.
    """

    def __init__(self, text: str = "") -> None:
        self._rope = Rope(text)
        self.version = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(text)

    def __str__(self) -> str:
        return str(self._rope)

    def text(self) -> str:
        return str(self._rope)

    def chunks(self) -> Iterator[str]:
        return self._rope.chunks()

    @property
    def len_bytes(self) -> int:
        return self._rope.len_bytes

    @property
    def len_chars(self) -> int:
        return self._rope.len_chars

    @property
    def line_count(self) -> int:
        return self._rope.len_lines

    # -- mutation -----------------------------------------------------------

    def insert(self, offset: int, text: str) -> None:
        ensure_offset(self, offset)
        if not text:
            return
        self._rope.insert(self._rope.byte_to_char(offset), text)
        self.version += 1

    def remove(self, start: int, end: int) -> str:
        """Remove ``[start, end)`` and return the removed text."""

        ensure_range(self, start, end)
        if start == end:
            return ""
        char_start = self._rope.byte_to_char(start)
        char_end = self._rope.byte_to_char(end)
        removed = self._rope.slice(char_start, char_end)
        self._rope.remove(char_start, char_end)
        self.version += 1
        return removed

    def replace_all_text(self, text: str) -> None:
        self._rope = Rope(text)
        self.version += 1

    # -- coordinate conversion ---------------------------------------------

    def is_boundary(self, offset: int) -> bool:
        try:
            self._rope.byte_to_char(offset)
        except ValueError:
            return False
        return True

    def byte_to_char(self, offset: int) -> int:
        return self._rope.byte_to_char(ensure_offset(self, offset))

    def char_to_byte(self, index: int) -> int:
        if index < 0 or index > self.len_chars:
            raise BufferValidationError("Char index out of range", offset=index)
        return self._rope.char_to_byte(index)

    def byte_to_line(self, offset: int) -> int:
        return self._rope.char_to_line(self.byte_to_char(offset))

    def line_to_byte(self, line: int) -> int:
        if line < 0 or line > self.line_count:
            raise BufferValidationError("Line index out of range", offset=line)
        return self._rope.char_to_byte(self._rope.line_to_char(line))

    def line_bounds(self, line: int) -> Tuple[int, int, int]:
        """Return ``(start, content_end, next_start)`` byte offsets for ``line``.

        ``content_end`` excludes the terminating newline; ``next_start`` is the
        first byte of the following line (or ``len_bytes`` for the last one).
        """

        start = self.line_to_byte(line)
        next_start = self.line_to_byte(line + 1)
        content_end = next_start
        if next_start > start and line + 1 < self.line_count:
            content_end = next_start - 1
        return start, content_end, next_start

    def line_text(self, line: int) -> str:
        start, content_end, _ = self.line_bounds(line)
        return self.slice(start, content_end)

    # -- reads --------------------------------------------------------------

    def slice(self, start: int, end: int) -> str:
        ensure_range(self, start, end)
        return self._rope.slice(
            self._rope.byte_to_char(start), self._rope.byte_to_char(end)
        )

    def char_at(self, offset: int) -> Optional[str]:
        """Character starting at ``offset``, or ``None`` at the end."""

        index = self.byte_to_char(offset)
        if index >= self.len_chars:
            return None
        return self._rope.char(index)

    def char_before(self, offset: int) -> Optional[str]:
        """Character ending at ``offset``, or ``None`` at the start."""

        index = self.byte_to_char(offset)
        if index == 0:
            return None
        return self._rope.char(index - 1)

    def next_boundary(self, offset: int) -> int:
        ch = self.char_at(offset)
        return offset if ch is None else offset + len(ch.encode("utf-8"))

    def prev_boundary(self, offset: int) -> int:
        ch = self.char_before(offset)
        return offset if ch is None else offset - len(ch.encode("utf-8"))

    def find_all(self, query: str, *, start: int = 0) -> List[Match]:
        """Non-overlapping byte ranges of ``query``, scanning left to right."""

        if not query:
            return []
        needle = query.encode("utf-8")
        haystack = self.text().encode("utf-8")
        matches: List[Match] = []
        pos = haystack.find(needle, start)
        while pos != -1:
            matches.append((pos, pos + len(needle)))
            pos = haystack.find(needle, pos + len(needle))
        return matches


__all__ = ["BufferDocument", "Match"]
