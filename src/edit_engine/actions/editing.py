"""Text-changing verbs: typing, deletion, line shifting and clipboard."""

from __future__ import annotations

from typing import List, Optional, Tuple

from edit_engine.runtime import telemetry

from .base import ActionResult, EditContext, edited, noop


def insert_char(context: EditContext, ch: str) -> ActionResult:
    context.buffer.insert_text(ch, label="insert_char")
    return edited("insert_char")


def delete(context: EditContext) -> ActionResult:
    """Delete the selection, or the character after the caret."""

    buffer = context.buffer
    if buffer.delete_selection():
        return edited("delete_selection")
    caret = buffer.caret
    end = context.document.next_boundary(caret)
    if end == caret:
        return noop("at_end")
    buffer.remove_range(caret, end, caret_after=caret, label="delete")
    return edited("delete")


def backspace(context: EditContext) -> ActionResult:
    """Delete the selection, or the character before the caret."""

    buffer = context.buffer
    if buffer.delete_selection():
        return edited("delete_selection")
    caret = buffer.caret
    start = context.document.prev_boundary(caret)
    if start == caret:
        return noop("at_start")
    buffer.remove_range(start, caret, caret_after=start, label="backspace")
    return edited("backspace")


def _affected_lines(context: EditContext) -> range:
    document = context.document
    selection = context.state.selection_range()
    start, end = selection if selection is not None else (context.buffer.caret,) * 2
    return range(document.byte_to_line(start), document.byte_to_line(end) + 1)


def indent(context: EditContext) -> ActionResult:
    """Insert ``indent_width`` spaces at the start of every affected line.

    Affected lines are the caret line, or every line the selection touches.
    The whole shift is one undo unit and keeps the selection in place.
    """

    document = context.document
    state = context.state
    pad = " " * context.indent_width
    starts = [document.line_to_byte(line) for line in _affected_lines(context)]
    caret = state.caret + len(pad) * sum(1 for pos in starts if state.caret >= pos)
    anchor = state.anchor
    if anchor is not None:
        anchor += len(pad) * sum(1 for pos in starts if anchor >= pos)

    buffer = context.buffer
    buffer.finalize()
    with telemetry.span("actions::indent", component="actions", metadata={"lines": len(starts)}):
        for pos in reversed(starts):
            buffer.insert_at(pos, pad, caret_after=caret, anchor_after=anchor, label="indent")
    buffer.finalize()
    return edited("indent", message=str(len(starts)))


def _leading_spaces(context: EditContext, line: int) -> int:
    count = 0
    for ch in context.document.line_text(line)[: context.indent_width]:
        if ch != " ":
            break
        count += 1
    return count


def _shift_back(pos: int, cuts: List[Tuple[int, int]]) -> int:
    """Where ``pos`` ends up once every ``(line_start, spaces)`` cut is removed."""

    return pos - sum(min(pos - start, spaces) for start, spaces in cuts if pos > start)


def dedent(context: EditContext) -> ActionResult:
    """Remove up to ``indent_width`` leading spaces from every affected line."""

    document = context.document
    state = context.state
    cuts = [
        (document.line_to_byte(line), _leading_spaces(context, line))
        for line in _affected_lines(context)
    ]
    cuts = [(start, spaces) for start, spaces in cuts if spaces]
    if not cuts:
        return noop("no_indent")
    caret = _shift_back(state.caret, cuts)
    anchor: Optional[int] = state.anchor
    if anchor is not None:
        anchor = _shift_back(anchor, cuts)

    buffer = context.buffer
    buffer.finalize()
    with telemetry.span("actions::dedent", component="actions", metadata={"lines": len(cuts)}):
        for start, spaces in reversed(cuts):
            buffer.remove_range(
                start, start + spaces, caret_after=caret, anchor_after=anchor, label="dedent"
            )
    buffer.finalize()
    return edited("dedent", message=str(len(cuts)))


def copy(context: EditContext) -> Optional[str]:
    """Put the selected text on the clipboard; ``None`` when nothing was copied."""

    text = context.buffer.selected_text()
    if text is None or not context.buffer.clipboard.write(text):
        return None
    return text


def cut(context: EditContext) -> Optional[str]:
    text = copy(context)
    if text is None:
        return None
    context.buffer.delete_selection()
    return text


def paste(context: EditContext, text: Optional[str] = None) -> ActionResult:
    """Insert ``text`` (or the clipboard contents) over the selection."""

    if text is None:
        text = context.buffer.clipboard.read()
    if not text:
        return noop("empty_clipboard")
    context.buffer.insert_text(text, label="paste")
    return edited("paste")


def select_all(context: EditContext) -> ActionResult:
    context.buffer.select_all()
    return ActionResult(consumed=True, status="select_all")


__all__ = [
    "backspace",
    "copy",
    "cut",
    "dedent",
    "delete",
    "indent",
    "insert_char",
    "paste",
    "select_all",
]
