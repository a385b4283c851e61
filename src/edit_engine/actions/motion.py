"""Caret motion over characters and visual rows, plus mouse placement."""

from __future__ import annotations

from .base import ActionResult, EditContext, moved, noop


def _collapse(context: EditContext, *, to_end: bool) -> bool:
    """Drop a selection, leaving the caret on one of its edges."""

    selection = context.state.selection_range()
    if selection is None:
        return False
    context.state.set_caret(selection[1] if to_end else selection[0])
    context.state.clear_selection()
    return True


def move_left(context: EditContext, extend: bool = False) -> ActionResult:
    if not extend and _collapse(context, to_end=False):
        return moved("collapse")
    state = context.state
    state.begin_or_keep_selection(extend)
    state.set_caret(context.document.prev_boundary(state.caret))
    return moved("move_left")


def move_right(context: EditContext, extend: bool = False) -> ActionResult:
    if not extend and _collapse(context, to_end=True):
        return moved("collapse")
    state = context.state
    state.begin_or_keep_selection(extend)
    state.set_caret(context.document.next_boundary(state.caret))
    return moved("move_right")


def _preferred_col(context: EditContext) -> int:
    state = context.state
    if state.preferred_col is None:
        state.preferred_col = context.mapper.byte_to_visual(state.caret)[1]
    return state.preferred_col


def move_up(context: EditContext, extend: bool = False) -> ActionResult:
    """One visual row up, aiming for the preferred column.

    On the first row the caret goes to the start of the document.
    """

    state = context.state
    state.begin_or_keep_selection(extend)
    col = _preferred_col(context)
    row, _ = context.mapper.byte_to_visual(state.caret)
    if row > context.layout.first_content_row:
        target = context.mapper.visual_to_byte(row - 1, col)
    else:
        target = 0
    state.set_caret(target, keep_preferred=True)
    return moved("move_up")


def move_down(context: EditContext, extend: bool = False) -> ActionResult:
    """One visual row down; on the last row the caret goes to the end."""

    state = context.state
    state.begin_or_keep_selection(extend)
    col = _preferred_col(context)
    row, _ = context.mapper.byte_to_visual(state.caret)
    if row < context.layout.last_content_row:
        target = context.mapper.visual_to_byte(row + 1, col)
    else:
        target = context.document.len_bytes
    state.set_caret(target, keep_preferred=True)
    return moved("move_down")


def place_caret(context: EditContext, row: int, col: int, *, extend: bool = False) -> ActionResult:
    """Put the caret at absolute visual ``(row, col)``; virtual rows are ignored."""

    line = context.layout.row(row)
    if line is None:
        return noop("outside_text")
    if line.is_continuation:
        col = max(col, line.indent)
    state = context.state
    state.begin_or_keep_selection(extend)
    state.set_caret(context.mapper.visual_to_byte(row, col))
    state.preferred_col = col
    return moved("place_caret")


def jump_to(context: EditContext, pos: int) -> ActionResult:
    context.state.clear_selection()
    context.state.set_caret(pos)
    return moved("jump")


__all__ = [
    "jump_to",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "place_caret",
]
