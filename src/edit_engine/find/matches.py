"""Literal substring matches over a document and circular navigation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from edit_engine.buffer.document import BufferDocument, Match


@dataclass(slots=True)
class FindState:
    """Current query, its non-overlapping matches and the selected one.

    ``index`` is ``None`` exactly when there are no matches.
    """

    query: str = ""
    matches: List[Match] = field(default_factory=list)
    index: Optional[int] = None

    @property
    def active(self) -> bool:
        return bool(self.query)

    @property
    def current(self) -> Optional[Match]:
        if self.index is None:
            return None
        return self.matches[self.index]

    def __len__(self) -> int:
        return len(self.matches)

    def clear(self) -> None:
        self.query = ""
        self.matches = []
        self.index = None

    def set_query(self, document: BufferDocument, query: str, caret: int) -> Optional[Match]:
        """Scan for ``query`` and select the first match at or after ``caret``."""

        self.query = query
        return self.refresh(document, caret)

    def refresh(self, document: BufferDocument, caret: int, *, strict: bool = False) -> Optional[Match]:
        """Rescan for the current query against the document as it is now."""

        self.matches = document.find_all(self.query) if self.query else []
        return self.select_from(caret, strict=strict)

    def select_from(self, caret: int, *, strict: bool = False) -> Optional[Match]:
        """Pick the first match starting at (or, if ``strict``, after) ``caret``.

        Wraps to the first match when none lies ahead.
        """

        if not self.matches:
            self.index = None
            return None
        self.index = 0
        for index, (start, _) in enumerate(self.matches):
            if start > caret or (start == caret and not strict):
                self.index = index
                break
        return self.current

    def next(self) -> Optional[Match]:
        if self.index is None:
            return None
        self.index = (self.index + 1) % len(self.matches)
        return self.current

    def previous(self) -> Optional[Match]:
        if self.index is None:
            return None
        self.index = (self.index - 1) % len(self.matches)
        return self.current


__all__ = ["FindState"]
