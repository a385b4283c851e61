"""Textual host adapter; ``app`` is imported lazily because it needs textual."""

from .controller import PromptState, TextualEditorAdapter, TextualUIHooks

__all__ = ["PromptState", "TextualEditorAdapter", "TextualUIHooks"]
