"""Reversible edit operations and time-coalesced undo/redo history."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Union

if TYPE_CHECKING:
    from .document import BufferDocument

DEFAULT_COALESCE_WINDOW = 1.0


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


@dataclass(frozen=True, slots=True)
class InsertOp:
    """``text`` was inserted at byte ``pos``."""

    pos: int
    text: str

    @property
    def end(self) -> int:
        return self.pos + _byte_len(self.text)

    def apply(self, document: "BufferDocument") -> None:
        document.insert(self.pos, self.text)

    def revert(self, document: "BufferDocument") -> None:
        document.remove(self.pos, self.end)


@dataclass(frozen=True, slots=True)
class DeleteOp:
    """``text`` was removed from byte ``pos``."""

    pos: int
    text: str

    @property
    def end(self) -> int:
        return self.pos + _byte_len(self.text)

    def apply(self, document: "BufferDocument") -> None:
        document.remove(self.pos, self.end)

    def revert(self, document: "BufferDocument") -> None:
        document.insert(self.pos, self.text)


EditOp = Union[InsertOp, DeleteOp]


@dataclass(slots=True)
class UndoRecord:
    op: EditOp
    caret_before: int
    caret_after: int
    anchor_before: Optional[int] = None
    anchor_after: Optional[int] = None


@dataclass(slots=True)
class UndoGroup:
    """Records that undo and redo together, oldest first."""

    timestamp: float
    records: List[UndoRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def first(self) -> UndoRecord:
        return self.records[0]

    @property
    def last(self) -> UndoRecord:
        return self.records[-1]


class UndoTimeline:
    """Undo/redo stacks plus the open group that new records coalesce into.

    A record joins the open group when it arrives within ``window`` seconds
    of the previous record; otherwise the open group is closed and a new one
    starts. :meth:`finalize` closes the open group explicitly so multi-step
    commands undo as one unit.
    """

    def __init__(
        self,
        *,
        window: float = DEFAULT_COALESCE_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window = window
        self._clock = clock
        self._undo: List[UndoGroup] = []
        self._redo: List[UndoGroup] = []
        self._open: Optional[UndoGroup] = None
        self._last_edit: Optional[float] = None

    def record(self, record: UndoRecord) -> None:
        now = self._clock()
        expired = self._last_edit is None or now - self._last_edit > self.window
        if expired or self._open is None:
            self.finalize()
            self._open = UndoGroup(timestamp=now)
        self._open.records.append(record)
        self._redo.clear()
        self._last_edit = now

    def finalize(self) -> None:
        group, self._open = self._open, None
        if group is not None and group.records:
            self._undo.append(group)

    def forget_last_edit_time(self) -> None:
        """Make the next record start a new group regardless of timing."""

        self._last_edit = None

    def can_undo(self) -> bool:
        return bool(self._undo) or bool(self._open and self._open.records)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> Optional[UndoGroup]:
        """Close the open group, then move the newest group to the redo stack."""

        self.finalize()
        if not self._undo:
            return None
        group = self._undo.pop()
        self._redo.append(group)
        return group

    def redo(self) -> Optional[UndoGroup]:
        if not self._redo:
            return None
        group = self._redo.pop()
        self._undo.append(group)
        return group

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._open = None
        self._last_edit = None

    @property
    def undo_depth(self) -> int:
        return len(self._undo) + (1 if self._open and self._open.records else 0)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)


__all__ = [
    "DEFAULT_COALESCE_WINDOW",
    "DeleteOp",
    "EditOp",
    "InsertOp",
    "UndoGroup",
    "UndoRecord",
    "UndoTimeline",
]
