"""Find navigation and replace verbs built on :class:`FindState`."""

from __future__ import annotations

from edit_engine.runtime import telemetry

from .base import ActionResult, EditContext, edited, noop
from .motion import jump_to


def _replace_range(context: EditContext, start: int, end: int, replacement: str) -> None:
    buffer = context.buffer
    buffer.state.select(end, start)
    buffer.delete_selection()
    for ch in replacement:
        buffer.insert_text(ch, label="replace")


def _close_group(context: EditContext) -> None:
    context.buffer.finalize()
    context.buffer.undo_timeline.forget_last_edit_time()


def set_query(context: EditContext, query: str) -> ActionResult:
    """Scan for ``query``; the caret jumps to the selected match, if any."""

    match = context.find.set_query(context.document, query, context.buffer.caret)
    if match is None:
        return noop("no_match")
    jump_to(context, match[0])
    position = f"{(context.find.index or 0) + 1}/{len(context.find)}"
    return ActionResult(consumed=True, status="find", message=position)


def find_next(context: EditContext) -> ActionResult:
    match = context.find.next()
    if match is None:
        return noop("no_match")
    return jump_to(context, match[0])


def find_previous(context: EditContext) -> ActionResult:
    match = context.find.previous()
    if match is None:
        return noop("no_match")
    return jump_to(context, match[0])


def replace_current(context: EditContext, replacement: str) -> ActionResult:
    """Replace the selected match and move on to the next one after it.

    The replacement undoes as a single unit.
    """

    find = context.find
    match = find.current
    if match is None:
        return noop("no_match")
    context.buffer.finalize()
    _replace_range(context, match[0], match[1], replacement)
    _close_group(context)

    following = find.refresh(context.document, context.buffer.caret, strict=True)
    if following is not None:
        jump_to(context, following[0])
    return edited("replace_current")


def replace_all(context: EditContext, query: str, replacement: str) -> ActionResult:
    """Replace every occurrence of ``query`` present when the command starts.

    Matches are taken left to right in one pass; text inserted by a
    replacement is never searched again.
    """

    if not query:
        return noop("empty_query")
    document = context.document
    matches = document.find_all(query)
    if not matches:
        context.find.set_query(document, query, context.buffer.caret)
        return noop("no_match")

    delta = len(replacement.encode("utf-8")) - len(query.encode("utf-8"))
    context.buffer.finalize()
    with telemetry.span(
        "actions::replace_all", component="actions", metadata={"matches": len(matches)}
    ):
        for number, (start, end) in enumerate(matches):
            shift = number * delta
            _replace_range(context, start + shift, end + shift, replacement)
    _close_group(context)

    context.find.set_query(document, query, context.buffer.caret)
    telemetry.record_event(
        "find.replace_all",
        data={"query": query, "count": len(matches), "buffer": context.buffer.name},
    )
    return edited("replace_all", message=str(len(matches)))


__all__ = [
    "find_next",
    "find_previous",
    "replace_all",
    "replace_current",
    "set_query",
]
