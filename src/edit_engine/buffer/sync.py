"""Error raised when a caller hands the document an invalid offset."""

from __future__ import annotations


class BufferValidationError(RuntimeError):
    """Raised when a byte offset is out of range or splits a code point."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
