"""
pi_styling — ANSI-aware measurement, borders, layout and compositing for
terminal text.

Every operation takes and returns plain strings that may contain escape
sequences; widths are always visible terminal columns.
"""
from . import border
from .align import (
    BOTTOM,
    CENTER,
    LEFT,
    MIDDLE,
    RIGHT,
    TOP,
    Alignment,
    HorizontalAlign,
    VerticalAlign,
    calculate_offset,
    split_space,
    to_fraction,
)
from .ansi import (
    RESET,
    AnsiCode,
    AnsiCodeTracker,
    Segment,
    SegmentKind,
    Segments,
    extract_ansi_code,
    has_escapes,
    hyperlink,
    is_sgr,
    is_sgr_only,
    segments,
    sequence,
    strip,
    wrap,
)
from .border import (
    BorderChars,
    BorderDimensions,
    BorderSpec,
    border_dimensions,
    frame,
    frame_block,
)
from .canvas import Canvas, Layer, new_canvas, new_layer, render
from .config import VERSION
from .layout import join_horizontal, join_vertical, place, place_horizontal, place_vertical
from .measure import (
    Block,
    Content,
    block_height,
    block_size,
    block_width,
    char_width,
    grapheme_width,
    line_width,
    split_graphemes,
)
from .strings import (
    SliceResult,
    dedent,
    indent,
    pad_to_width,
    repeat_to_width,
    slice_by_column,
    slice_with_width,
    truncate_to_width,
    wrap_to_width,
)

__version__ = VERSION

__all__ = [
    # Escape sequences
    "AnsiCode",
    "AnsiCodeTracker",
    "RESET",
    "Segment",
    "SegmentKind",
    "Segments",
    "extract_ansi_code",
    "has_escapes",
    "hyperlink",
    "is_sgr",
    "is_sgr_only",
    "segments",
    "sequence",
    "strip",
    "wrap",
    # Measurement
    "Block",
    "Content",
    "block_height",
    "block_size",
    "block_width",
    "char_width",
    "grapheme_width",
    "line_width",
    "split_graphemes",
    # Column-aware strings
    "SliceResult",
    "dedent",
    "indent",
    "pad_to_width",
    "repeat_to_width",
    "slice_by_column",
    "slice_with_width",
    "truncate_to_width",
    "wrap_to_width",
    # Alignment
    "Alignment",
    "BOTTOM",
    "CENTER",
    "HorizontalAlign",
    "LEFT",
    "MIDDLE",
    "RIGHT",
    "TOP",
    "VerticalAlign",
    "calculate_offset",
    "split_space",
    "to_fraction",
    # Borders
    "BorderChars",
    "BorderDimensions",
    "BorderSpec",
    "border",
    "border_dimensions",
    "frame",
    "frame_block",
    # Layout
    "join_horizontal",
    "join_vertical",
    "place",
    "place_horizontal",
    "place_vertical",
    # Canvas
    "Canvas",
    "Layer",
    "new_canvas",
    "new_layer",
    "render",
]
