"""Editing verbs shared by the editor and host adapters."""

from .base import ActionResult, EditContext
from .editing import (
    backspace,
    copy,
    cut,
    dedent,
    delete,
    indent,
    insert_char,
    paste,
    select_all,
)
from .motion import jump_to, move_down, move_left, move_right, move_up, place_caret
from .replace import find_next, find_previous, replace_all, replace_current, set_query

__all__ = [
    "ActionResult",
    "EditContext",
    "backspace",
    "copy",
    "cut",
    "dedent",
    "delete",
    "find_next",
    "find_previous",
    "indent",
    "insert_char",
    "jump_to",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "paste",
    "place_caret",
    "replace_all",
    "replace_current",
    "select_all",
    "set_query",
]
