"""Clipboard register used by copy/cut/paste."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class RegisterValue:
    text: str


class ClipboardRegister:
    """In-process clipboard; hosts override ``clipboard_get``/``clipboard_set``.

    The engine never talks to the OS clipboard itself. A host adapter that
    does should subclass this and return ``False`` from ``clipboard_set`` when
    the write fails, which makes cut abort before touching the buffer.
    """

    def __init__(self) -> None:
        self._value: Optional[RegisterValue] = None

    def write(self, text: str) -> bool:
        if not self.clipboard_set(text):
            return False
        self._value = RegisterValue(text=text)
        return True

    def read(self) -> Optional[str]:
        external = self.clipboard_get()
        if external is not None:
            return external
        return self._value.text if self._value else None

    def clear(self) -> None:
        self._value = None

    def clipboard_get(self) -> Optional[str]:  # host adapters override
        return None

    def clipboard_set(self, value: str) -> bool:  # host adapters override
        del value
        return True
