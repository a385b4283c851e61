"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from .sync import BufferValidationError

if TYPE_CHECKING:
    from .document import BufferDocument


def ensure_offset(document: "BufferDocument", offset: int) -> int:
    """Return ``offset`` if it is a UTF-8 boundary inside the document."""

    if offset < 0 or offset > document.len_bytes:
        raise BufferValidationError("Byte offset out of range", offset=offset)
    if not document.is_boundary(offset):
        raise BufferValidationError("Byte offset splits a code point", offset=offset)
    return offset


def ensure_range(document: "BufferDocument", start: int, end: int) -> Tuple[int, int]:
    if start > end:
        raise BufferValidationError("Range start after end", offset=start)
    return ensure_offset(document, start), ensure_offset(document, end)
