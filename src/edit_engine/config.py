"""Editor settings with ``EDIT_ENGINE_*`` environment overrides."""

from __future__ import annotations

from dataclasses import dataclass

from edit_engine.runtime.telemetry import env, env_flag, env_int


@dataclass(slots=True)
class EditorConfig:
    word_wrap: bool = True
    virtual_lines: int = 2
    scrolloff: int = 3
    coalesce_window: float = 1.0
    indent_width: int = 4
    scroll_step: int = 3

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Defaults, overridden by ``EDIT_ENGINE_WORD_WRAP``, ``_SCROLLOFF``,
        ``_COALESCE_MS`` and ``_INDENT_WIDTH`` when set."""

        base = cls()
        coalesce = base.coalesce_window
        if env("COALESCE_MS") is not None:
            coalesce = max(env_int("COALESCE_MS", 1000), 0) / 1000.0
        return cls(
            word_wrap=env_flag("WORD_WRAP", base.word_wrap),
            scrolloff=max(env_int("SCROLLOFF", base.scrolloff), 0),
            coalesce_window=coalesce,
            indent_width=max(env_int("INDENT_WIDTH", base.indent_width), 1),
        )


__all__ = ["EditorConfig"]
