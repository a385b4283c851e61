"""Shared context and result types for editing verbs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from edit_engine.buffer import Buffer
from edit_engine.find import FindState
from edit_engine.layout import LayoutEngine, PositionMapper


@dataclass(slots=True)
class ActionResult:
    """Outcome of an action; ``mutated`` tells the caller the text changed."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    mutated: bool = False


@dataclass(slots=True)
class EditContext:
    """Everything an action may read or change."""

    buffer: Buffer
    layout: LayoutEngine
    mapper: PositionMapper = field(init=False)
    find: FindState = field(default_factory=FindState)
    indent_width: int = 4

    def __post_init__(self) -> None:
        self.mapper = PositionMapper(self.layout)

    @property
    def document(self):
        return self.buffer.document

    @property
    def state(self):
        return self.buffer.state


def noop(status: str = "noop") -> ActionResult:
    return ActionResult(consumed=False, status=status)


def edited(status: str, message: Optional[str] = None) -> ActionResult:
    return ActionResult(consumed=True, status=status, message=message, mutated=True)


def moved(status: str = "move") -> ActionResult:
    return ActionResult(consumed=True, status=status)


__all__ = ["ActionResult", "EditContext", "edited", "moved", "noop"]
