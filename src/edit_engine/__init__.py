"""UI-agnostic text-editing engine: rope buffer, wrap layout, undo and find."""

from .config import EditorConfig
from .editor import DocumentIOError, Editor

__all__ = [
    "DocumentIOError",
    "Editor",
    "EditorConfig",
    "actions",
    "adapters",
    "buffer",
    "find",
    "layout",
    "runtime",
]

__version__ = "0.1.0"
