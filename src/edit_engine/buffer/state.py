"""Caret, selection anchor and preferred column tracked for a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

ByteRange = Tuple[int, int]


@dataclass(slots=True)
class BufferState:
    """Mutable caret/selection info; all positions are byte offsets.

    A selection exists iff ``anchor`` is set. ``preferred_col`` is the display
    column vertical motion aims for; ``None`` means "derive it from the caret
    on the next vertical move".
    """

    caret: int = 0
    anchor: Optional[int] = None
    preferred_col: Optional[int] = None

    @property
    def has_selection(self) -> bool:
        return self.anchor is not None

    def selection_range(self) -> Optional[ByteRange]:
        if self.anchor is None:
            return None
        if self.anchor <= self.caret:
            return (self.anchor, self.caret)
        return (self.caret, self.anchor)

    def clear_selection(self) -> None:
        self.anchor = None

    def begin_or_keep_selection(self, extend: bool) -> None:
        """Apply the ``extend`` flag of a cursor-moving command before it moves."""

        if extend:
            if self.anchor is None:
                self.anchor = self.caret
        else:
            self.anchor = None

    def set_caret(self, caret: int, *, keep_preferred: bool = False) -> None:
        self.caret = caret
        if not keep_preferred:
            self.preferred_col = None

    def select(self, anchor: int, caret: int) -> None:
        self.anchor = anchor
        self.caret = caret
        self.preferred_col = None

    def reset(self) -> None:
        self.caret = 0
        self.anchor = None
        self.preferred_col = None
