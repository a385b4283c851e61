"""Scroll offsets of the editing area over the visual rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class Viewport:
    """Top row and left column of the visible window, plus its size.

    ``scrolloff`` is the number of rows (and columns, when not wrapping) kept
    between the caret and the window edge.
    """

    top: int = 0
    left: int = 0
    height: int = 24
    width: int = 80
    scrolloff: int = 3

    def resize(self, height: int, width: int) -> None:
        self.height = max(height, 1)
        self.width = max(width, 1)

    def follow(self, row: int, col: int, *, horizontal: bool) -> None:
        off = min(self.scrolloff, (self.height - 1) // 2)
        if row < self.top + off:
            self.top = max(row - off, 0)
        elif row >= self.top + self.height - off:
            self.top = max(row + off + 1 - self.height, 0)

        if not horizontal:
            self.left = 0
            return
        off = min(self.scrolloff, (self.width - 1) // 2)
        if col < self.left + off:
            self.left = max(col - off, 0)
        elif col >= self.left + self.width - off:
            self.left = max(col + off + 1 - self.width, 0)

    def scroll(self, delta: int, total_rows: int) -> int:
        """Move the top row by ``delta``, clamped to the document; returns it."""

        limit = max(total_rows - self.height, 0)
        self.top = min(max(self.top + delta, 0), limit)
        return self.top

    def to_absolute(self, screen_row: int, screen_col: int) -> Tuple[int, int]:
        return self.top + max(screen_row, 0), self.left + max(screen_col, 0)

    def visible(self, total_rows: int) -> range:
        return range(self.top, min(self.top + self.height, total_rows))


__all__ = ["Viewport"]
