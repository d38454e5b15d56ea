"""
Alignment anchors and the offset arithmetic shared by the layout functions.

An alignment is a fraction in [0, 1] along one axis: 0 anchors content at the
start, 0.5 centers it, 1 anchors it at the end. Named anchors map onto the
same three fractions and always produce identical offsets.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Union

# Position constants
LEFT = 0.0
CENTER = 0.5
RIGHT = 1.0
TOP = 0.0
MIDDLE = 0.5
BOTTOM = 1.0


class HorizontalAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @property
    def fraction(self) -> float:
        return _NAMED[self.value]


class VerticalAlign(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"

    @property
    def fraction(self) -> float:
        return _NAMED[self.value]


_NAMED: dict[str, float] = {
    "left": LEFT,
    "center": CENTER,
    "right": RIGHT,
    "top": TOP,
    "middle": MIDDLE,
    "bottom": BOTTOM,
}

Alignment = Union[float, int, str, HorizontalAlign, VerticalAlign]


def to_fraction(align: Alignment) -> float:
    """
    Normalize an alignment to a fraction in [0, 1].

    Numbers are clamped into range. Names are case-insensitive. Raises
    ValueError for an unknown name or NaN, TypeError for anything else.
    """
    if isinstance(align, (HorizontalAlign, VerticalAlign)):
        return align.fraction
    if isinstance(align, str):
        try:
            return _NAMED[align.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Unknown alignment {align!r}; expected one of {', '.join(_NAMED)} or a number in [0, 1]"
            ) from None
    if isinstance(align, bool) or not isinstance(align, (int, float)):
        raise TypeError(f"Alignment must be a number or a name, got {type(align).__name__}")
    if math.isnan(align):
        raise ValueError("Alignment must not be NaN")
    return max(0.0, min(1.0, float(align)))


def split_space(total: int, align: Alignment) -> tuple[int, int]:
    """
    Split total cells of free space into (leading, trailing) for an alignment.

    leading is fraction × total rounded to the nearest integer; an exact tie
    gives the extra cell to the trailing side.
    """
    if total <= 0:
        return 0, 0
    fraction = to_fraction(align)
    # round away float noise so 0.5 * 9 is an exact tie
    exact = round(fraction * total, 9)
    leading = min(max(math.ceil(exact - 0.5), 0), total)
    return leading, total - leading


def calculate_offset(align: Alignment, container_size: int, content_size: int) -> int:
    """Offset of content inside a container along one axis."""
    return split_space(max(0, container_size - content_size), align)[0]
