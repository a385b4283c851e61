"""Rope-backed document, selection state and undo/redo history."""

from .buffer import Buffer, Transaction
from .document import BufferDocument, Match
from .registers import ClipboardRegister, RegisterValue
from .rope import Rope
from .state import BufferState, ByteRange
from .sync import BufferValidationError
from .undo import DeleteOp, EditOp, InsertOp, UndoGroup, UndoRecord, UndoTimeline
from .validation import ensure_offset, ensure_range

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "ByteRange",
    "ClipboardRegister",
    "DeleteOp",
    "EditOp",
    "InsertOp",
    "Match",
    "RegisterValue",
    "Rope",
    "Transaction",
    "UndoGroup",
    "UndoRecord",
    "UndoTimeline",
    "ensure_offset",
    "ensure_range",
]
