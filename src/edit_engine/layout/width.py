"""Terminal display width of characters and strings."""

from __future__ import annotations

from functools import lru_cache

from wcwidth import wcwidth

TAB_WIDTH = 4


@lru_cache(maxsize=4096)
def char_width(ch: str) -> int:
    """Columns ``ch`` occupies: 2 for East Asian wide, 0 for combining/control."""

    if ch == "\t":
        return TAB_WIDTH
    width = wcwidth(ch)
    return width if width > 0 else 0


def text_width(text: str) -> int:
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(char_width(ch) for ch in text)


def skip_columns(text: str, columns: int) -> str:
    """Drop the first ``columns`` display columns of ``text``.

    A tab or wide character cut in half leaves spaces for its visible part.
    """

    used = 0
    for index, ch in enumerate(text):
        if used >= columns:
            return text[index:]
        used += char_width(ch)
        if used > columns:
            return " " * (used - columns) + text[index + 1 :]
    return ""


def pad_to_width(text: str, width: int) -> str:
    """Expand tabs and pad or trim ``text`` to exactly ``width`` columns."""

    out = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width:
            break
        if w == 0 and not ch.isprintable():
            continue
        out.append(" " * TAB_WIDTH if ch == "\t" else ch)
        used += w
    return "".join(out) + " " * (width - used)


__all__ = ["TAB_WIDTH", "char_width", "pad_to_width", "skip_columns", "text_width"]
