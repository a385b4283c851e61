"""High-level buffer façade combining document, state, clipboard and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from edit_engine.runtime import telemetry

from .document import BufferDocument
from .registers import ClipboardRegister
from .state import BufferState, ByteRange
from .undo import DeleteOp, EditOp, InsertOp, UndoRecord, UndoTimeline


class Buffer:
    """Applies edits to the document and records them for undo.

    Every mutation goes through a :class:`Transaction`, which profiles the
    edit and pushes exactly one :class:`UndoRecord` onto the timeline. The
    record is captured as the edit is applied, never diffed afterwards.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        clipboard: Optional[ClipboardRegister] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.clipboard = clipboard or ClipboardRegister()
        self.undo_timeline = undo or UndoTimeline()
        self.modified = False

    @classmethod
    def from_text(
        cls, text: str, *, name: str = "default", undo: Optional[UndoTimeline] = None
    ) -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text), undo=undo)

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def caret(self) -> int:
        return self.state.caret

    def text(self) -> str:
        return self.document.text()

    def load_text(self, text: str) -> None:
        """Replace the whole document; history, caret and selection reset."""

        self.document.replace_all_text(text)
        self.state.reset()
        self.undo_timeline.clear()
        self.modified = False

    # -- primitive edits ----------------------------------------------------

    def insert_at(
        self,
        pos: int,
        text: str,
        *,
        caret_after: int,
        anchor_after: Optional[int] = None,
        label: str = "insert",
    ) -> None:
        if not text:
            return
        with Transaction(self, label) as tx:
            self.document.insert(pos, text)
            tx.commit(InsertOp(pos=pos, text=text), caret_after, anchor_after)

    def remove_range(
        self,
        start: int,
        end: int,
        *,
        caret_after: int,
        anchor_after: Optional[int] = None,
        label: str = "remove",
    ) -> str:
        if start >= end:
            return ""
        with Transaction(self, label) as tx:
            removed = self.document.remove(start, end)
            tx.commit(DeleteOp(pos=start, text=removed), caret_after, anchor_after)
        return removed

    # -- selection-aware edits ----------------------------------------------

    def delete_selection(self) -> bool:
        """Remove a non-empty selection, collapsing the caret to its start."""

        selection = self.state.selection_range()
        if selection is None:
            return False
        start, end = selection
        if start == end:
            return False
        self.remove_range(start, end, caret_after=start, label="delete_selection")
        return True

    def insert_text(self, text: str, *, label: str = "insert_text") -> None:
        """Type or paste ``text`` at the caret, replacing any selection."""

        self.delete_selection()
        self.state.clear_selection()
        pos = self.state.caret
        self.insert_at(pos, text, caret_after=pos + len(text.encode("utf-8")), label=label)

    def selected_text(self) -> Optional[str]:
        selection = self.state.selection_range()
        if selection is None or selection[0] == selection[1]:
            return None
        return self.document.slice(*selection)

    def selection_range(self) -> Optional[ByteRange]:
        return self.state.selection_range()

    def select_all(self) -> None:
        self.state.select(0, self.document.len_bytes)

    # -- history ------------------------------------------------------------

    def finalize(self) -> None:
        self.undo_timeline.finalize()

    def undo(self) -> bool:
        group = self.undo_timeline.undo()
        if group is None:
            return False
        with telemetry.span(
            "buffer::undo", component="buffer", metadata={"ops": len(group)}
        ):
            for record in reversed(group.records):
                record.op.revert(self.document)
        self._restore(group.first.caret_before, group.first.anchor_before)
        self.modified = self.undo_timeline.undo_depth > 0
        telemetry.record_event(
            "buffer.undo", data={"buffer": self.name, "ops": len(group)}
        )
        return True

    def redo(self) -> bool:
        group = self.undo_timeline.redo()
        if group is None:
            return False
        with telemetry.span(
            "buffer::redo", component="buffer", metadata={"ops": len(group)}
        ):
            for record in group.records:
                record.op.apply(self.document)
        self._restore(group.last.caret_after, group.last.anchor_after)
        self.modified = True
        telemetry.record_event(
            "buffer.redo", data={"buffer": self.name, "ops": len(group)}
        )
        return True

    def _restore(self, caret: int, anchor: Optional[int]) -> None:
        limit = self.document.len_bytes
        self.state.caret = min(caret, limit)
        self.state.anchor = None if anchor is None else min(anchor, limit)
        self.state.preferred_col = None


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one document mutation in a telemetry span and records it."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._caret_before = 0
        self._anchor_before: Optional[int] = None

    def __enter__(self) -> "Transaction":
        self._caret_before = self.buffer.state.caret
        self._anchor_before = self.buffer.state.anchor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self, op: EditOp, caret_after: int, anchor_after: Optional[int] = None
    ) -> None:
        self.buffer.undo_timeline.record(
            UndoRecord(
                op=op,
                caret_before=self._caret_before,
                caret_after=caret_after,
                anchor_before=self._anchor_before,
                anchor_after=anchor_after,
            )
        )
        self.buffer.state.caret = caret_after
        self.buffer.state.anchor = anchor_after
        self.buffer.state.preferred_col = None
        self.buffer.modified = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
