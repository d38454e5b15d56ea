"""
Layout joiner — combine and position blocks of styled text.

Provides:
- join_horizontal(): blocks side by side, aligned vertically
- join_vertical(): blocks stacked, aligned horizontally
- place() / place_horizontal() / place_vertical(): anchor a block inside a
  fixed-size area, filling the rest with a (optionally styled) pattern

Alignments are fractions in [0, 1] or their names; see align.py for how free
space is split.
"""
from __future__ import annotations

import logging
from typing import Callable

from .align import Alignment, split_space, to_fraction
from .measure import Block, Content, line_width
from .strings import pad_to_width, repeat_to_width

logger = logging.getLogger(__name__)

StyleFn = Callable[[str], str]


def _text_of(content: Content) -> str:
    return content.text if isinstance(content, Block) else content


def join_horizontal(align: Alignment, *blocks: Content) -> str:
    """
    Join blocks left to right.

    Shorter blocks are padded with blank lines of their own width, above and
    below according to align (0 = top, 1 = bottom). Each block's lines are
    filled to that block's width so ragged lines do not shift the columns to
    their right. No separator is inserted.
    """
    fraction = to_fraction(align)
    if not blocks:
        return ""
    if len(blocks) == 1:
        return _text_of(blocks[0])

    measured = [Block.of(b) for b in blocks]
    max_height = max(b.height for b in measured)

    columns: list[list[str]] = []
    for block in measured:
        blank = " " * block.width
        above, below = split_space(max_height - block.height, fraction)
        columns.append(
            [blank] * above
            + [pad_to_width(ln, block.width) for ln in block.lines]
            + [blank] * below
        )

    return "\n".join("".join(col[row] for col in columns) for row in range(max_height))


def join_vertical(align: Alignment, *blocks: Content) -> str:
    """
    Stack blocks top to bottom.

    Every line is padded with spaces to the widest block, left and right
    according to align (0 = left, 1 = right).
    """
    fraction = to_fraction(align)
    if not blocks:
        return ""
    if len(blocks) == 1:
        return _text_of(blocks[0])

    measured = [Block.of(b) for b in blocks]
    max_width = max(b.width for b in measured)

    out: list[str] = []
    for block in measured:
        for ln in block.lines:
            left, right = split_space(max_width - line_width(ln), fraction)
            out.append(" " * left + ln + " " * right)
    return "\n".join(out)


# ─────────────────────────────────────────────────────────────────────────────
# Placement
# ─────────────────────────────────────────────────────────────────────────────

def _filler(fill_char: str, fill_style: StyleFn | None) -> Callable[[int], str]:
    if not fill_char or line_width(fill_char) <= 0:
        raise ValueError(f"Fill pattern must have a visible width, got {fill_char!r}")

    def fill(count: int) -> str:
        if count <= 0:
            return ""
        run = repeat_to_width(fill_char, count)
        return fill_style(run) if fill_style else run

    return fill


def _check_size(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def place(
    width: int,
    height: int,
    h_align: Alignment,
    v_align: Alignment,
    content: Content,
    fill_char: str = " ",
    fill_style: StyleFn | None = None,
) -> str:
    """
    Anchor content inside a width x height area.

    The content is treated as a rectangle as wide as its widest line; every
    cell outside it (including the ragged ends of short lines) is filled with
    fill_char, repeated. fill_style, when given, styles the fill runs only.

    Content larger than the area is not clipped. Raises ValueError for a
    negative size or a fill pattern with no visible width.
    """
    _check_size(width=width, height=height)
    h = to_fraction(h_align)
    v = to_fraction(v_align)
    fill = _filler(fill_char, fill_style)
    if width == 0 or height == 0:
        return ""

    block = Block.of(content)
    if block.width > width or block.height > height:
        logger.debug(
            "Content %dx%d exceeds placement area %dx%d; left unclipped",
            block.width, block.height, width, height,
        )

    above, below = split_space(height - block.height, v)
    left, right = split_space(width - block.width, h)
    blank_row = fill(width)

    rows: list[str] = [blank_row] * above
    for ln in block.lines:
        rows.append(fill(left) + ln + fill(block.width - line_width(ln) + right))
    rows.extend([blank_row] * below)
    return "\n".join(rows)


def place_horizontal(
    width: int,
    align: Alignment,
    content: Content,
    fill_char: str = " ",
    fill_style: StyleFn | None = None,
) -> str:
    """Anchor content horizontally in width columns, keeping its height."""
    _check_size(width=width)
    h = to_fraction(align)
    fill = _filler(fill_char, fill_style)

    block = Block.of(content)
    left, right = split_space(width - block.width, h)
    return "\n".join(
        fill(left) + ln + fill(block.width - line_width(ln) + right) for ln in block.lines
    )


def place_vertical(
    height: int,
    align: Alignment,
    content: Content,
    fill_char: str = " ",
    fill_style: StyleFn | None = None,
) -> str:
    """Anchor content vertically in height rows, keeping its width."""
    _check_size(height=height)
    v = to_fraction(align)
    fill = _filler(fill_char, fill_style)

    block = Block.of(content)
    above, below = split_space(height - block.height, v)
    blank_row = fill(block.width)
    return "\n".join([blank_row] * above + list(block.lines) + [blank_row] * below)
