"""Word-wrapped visual layout, caret mapping and scrolling."""

from .engine import DEFAULT_VIRTUAL_LINES, LayoutEngine, VisualLine
from .mapper import PositionMapper, VisualPos
from .viewport import Viewport
from .width import TAB_WIDTH, char_width, pad_to_width, skip_columns, text_width
from .wrap import Segment, continuation_indent, wrap_segments

__all__ = [
    "DEFAULT_VIRTUAL_LINES",
    "LayoutEngine",
    "PositionMapper",
    "Segment",
    "TAB_WIDTH",
    "Viewport",
    "VisualLine",
    "VisualPos",
    "char_width",
    "continuation_indent",
    "pad_to_width",
    "skip_columns",
    "text_width",
    "wrap_segments",
]
