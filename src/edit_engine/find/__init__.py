"""Find/replace state."""

from .matches import FindState

__all__ = ["FindState"]
