"""
Canvas compositor — paint positioned blocks ("layers") onto one grid.

Provides:
- Layer: styled text at a fixed (x, y); repositioning returns a new Layer
- Canvas: ordered layers; later layers paint over earlier ones
- render(): composite a canvas into a string

Each visible grapheme becomes one cell (two for wide graphemes). The escape
sequences directly in front of a grapheme travel with it, and every cell also
remembers the SGR state of its own line at that point, so a cell copied out of
a styled run keeps its style even after its neighbours were painted over. Each
line starts neutral; escapes trailing the last visible grapheme are dropped.
"""
from __future__ import annotations

import logging
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field

from . import config
from .ansi import RESET, AnsiCodeTracker, is_sgr_only, segments
from .measure import Block, Content, grapheme_width, split_graphemes

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Layers
# ─────────────────────────────────────────────────────────────────────────────

class Layer(BaseModel):
    """A block of styled text anchored at a non-negative (x, y) position."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    x: int = Field(default=0, ge=0, strict=True)
    y: int = Field(default=0, ge=0, strict=True)

    @cached_property
    def block(self) -> Block:
        return Block.of(self.content)

    @property
    def width(self) -> int:
        return self.block.width

    @property
    def height(self) -> int:
        return self.block.height

    @property
    def dimensions(self) -> tuple[int, int]:
        block = self.block
        return block.width, block.height

    def with_content(self, content: Content) -> Layer:
        text = content.text if isinstance(content, Block) else content
        return Layer(content=text, x=self.x, y=self.y)

    def with_x(self, x: int) -> Layer:
        return Layer(content=self.content, x=x, y=self.y)

    def with_y(self, y: int) -> Layer:
        return Layer(content=self.content, x=self.x, y=y)

    def at(self, x: int, y: int) -> Layer:
        return Layer(content=self.content, x=x, y=y)

    def moved_by(self, dx: int, dy: int) -> Layer:
        return Layer(content=self.content, x=self.x + dx, y=self.y + dy)


def new_layer(content: Content, x: int = 0, y: int = 0) -> Layer:
    text = content.text if isinstance(content, Block) else content
    return Layer(content=text, x=x, y=y)


class Canvas(BaseModel):
    """Layers in paint order. Dimensions are derived from the layers."""

    model_config = ConfigDict(frozen=True)

    layers: tuple[Layer, ...] = ()

    @classmethod
    def of(cls, *layers: Layer) -> Canvas:
        return cls(layers=layers)

    def add(self, *layers: Layer) -> Canvas:
        return Canvas(layers=self.layers + layers)

    @property
    def width(self) -> int:
        return max((layer.x + layer.width for layer in self.layers), default=0)

    @property
    def height(self) -> int:
        return max((layer.y + layer.height for layer in self.layers), default=0)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def render(self) -> str:
        return render(self)

    def __len__(self) -> int:
        return len(self.layers)


def new_canvas(*layers: Layer) -> Canvas:
    return Canvas(layers=layers)


# ─────────────────────────────────────────────────────────────────────────────
# Compositing
# ─────────────────────────────────────────────────────────────────────────────

# char of the second cell of a wide grapheme
_CONTINUATION = ""


class _Cell:
    __slots__ = ("char", "prefix", "style")

    def __init__(self) -> None:
        self.char = config.BLANK
        self.prefix = ""
        self.style = ""


def _release(row: list[_Cell], col: int) -> None:
    """Blank the other half of a wide grapheme that is about to lose one half."""
    cell = row[col]
    if cell.char == _CONTINUATION and col > 0:
        row[col - 1].char = config.BLANK
    elif col + 1 < len(row) and row[col + 1].char == _CONTINUATION:
        row[col + 1].char = config.BLANK


def _put(row: list[_Cell], col: int, grapheme: str, width: int, prefix: str, style: str) -> None:
    _release(row, col)
    if width == 2:
        _release(row, col + 1)
    cell = row[col]
    cell.char = grapheme
    cell.prefix = prefix
    cell.style = style
    if width == 2:
        tail = row[col + 1]
        tail.char = _CONTINUATION
        tail.prefix = ""
        tail.style = style


def _paint(grid: list[list[_Cell]], layer: Layer, width: int, height: int) -> int:
    """Paint one layer; returns the number of clipped graphemes."""
    tab = " " * config.TAB_WIDTH
    clipped = 0

    for dy, line in enumerate(layer.block.lines):
        y = layer.y + dy
        row = grid[y] if 0 <= y < height else None
        x = layer.x
        # every line starts from neutral; only prefixes attached to a cell count
        tracker = AnsiCodeTracker()
        pending = ""
        last_col: int | None = None

        for seg in segments(line):
            if seg.is_control:
                pending += seg.text
                continue
            for g in split_graphemes(seg.text.replace("\t", tab)):
                w = grapheme_width(g)
                if w == 0:
                    # stray combining mark: joins the cell before it
                    if row is not None and last_col is not None and g.isprintable():
                        row[last_col].char += g
                    continue
                tracker.feed(pending)
                if row is not None and 0 <= x and x + w <= width:
                    _put(row, x, g, w, pending, tracker.get_active_codes())
                    last_col = x
                else:
                    clipped += 1
                pending = ""
                x += w
        # a control run with no visible character after it on this line is dropped

    return clipped


def _trimmable(cell: _Cell) -> bool:
    # an unstyled blank whose prefix, if any, only touches SGR state
    return cell.char == config.BLANK and not cell.style and is_sgr_only(cell.prefix)


def _serialize(row: list[_Cell]) -> str:
    # dropped prefixes leave the state neutral, which the row-end reset restores anyway
    end = len(row)
    while end > 0 and _trimmable(row[end - 1]):
        end -= 1

    emitted = AnsiCodeTracker()
    parts: list[str] = []
    for cell in row[:end]:
        if cell.prefix:
            parts.append(cell.prefix)
            emitted.feed(cell.prefix)
        if emitted.get_active_codes() != cell.style:
            # style bled in from a neighbouring layer; restore this cell's own
            if emitted.has_active_codes():
                parts.append(RESET)
            parts.append(cell.style)
            emitted.clear()
            emitted.feed(cell.style)
        parts.append(cell.char)
    if emitted.has_active_codes():
        parts.append(RESET)
    return "".join(parts)


def render(canvas: Canvas) -> str:
    """
    Composite every layer of canvas, in order, into a single string.

    Trailing unstyled blanks are trimmed from each row and blank rows are
    trimmed from the bottom. Cells falling outside the grid are dropped.
    """
    width, height = canvas.size
    if width == 0 or height == 0:
        return ""

    grid = [[_Cell() for _ in range(width)] for _ in range(height)]
    clipped = 0
    for layer in canvas.layers:
        clipped += _paint(grid, layer, width, height)
    if clipped:
        logger.debug("Clipped %d graphemes outside the %dx%d canvas", clipped, width, height)

    rows = [_serialize(row) for row in grid]
    while rows and rows[-1] == "":
        rows.pop()
    return "\n".join(rows)
