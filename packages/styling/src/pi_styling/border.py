"""
Border renderer and border character sets.

Provides:
- BorderChars / BorderSpec: immutable glyph sets plus a per-side enable mask
- presets: normal(), rounded(), thick(), double(), ascii(), hidden(), custom()
- side and glyph operations that return new specs (with_sides(), top_only(), ...)
- frame(): draw a border around a block of styled text
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Mapping

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator

from .measure import Block, Content, line_width
from .strings import pad_to_width

BorderType = Literal["normal", "rounded", "thick", "double", "ascii", "hidden", "custom"]
Side = Literal["top", "right", "bottom", "left"]
Sides = tuple[StrictBool, StrictBool, StrictBool, StrictBool]

SIDE_NAMES: tuple[str, ...] = ("top", "right", "bottom", "left")
ALL_SIDES = (True, True, True, True)


# ─── Glyph sets ──────────────────────────────────────────────────────────────

class BorderChars(BaseModel):
    """The eight glyphs a border is drawn with. Each must be one column wide."""

    model_config = ConfigDict(frozen=True)

    top: str
    right: str
    bottom: str
    left: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str

    @field_validator("*")
    @classmethod
    def _one_column(cls, glyph: str) -> str:
        # Glyphs may carry their own escape sequences; only the visible part counts
        if line_width(glyph) != 1:
            raise ValueError(f"Border glyph {glyph!r} must occupy exactly one column")
        return glyph


class BorderSpec(BaseModel):
    """A glyph set plus which sides are drawn, in (top, right, bottom, left) order."""

    model_config = ConfigDict(frozen=True)

    type: BorderType = "normal"
    chars: BorderChars
    sides: Sides = ALL_SIDES

    @property
    def has_top(self) -> bool:
        return self.sides[0]

    @property
    def has_right(self) -> bool:
        return self.sides[1]

    @property
    def has_bottom(self) -> bool:
        return self.sides[2]

    @property
    def has_left(self) -> bool:
        return self.sides[3]


_CHARS: dict[str, BorderChars] = {
    "normal": BorderChars(
        top="─", right="│", bottom="─", left="│",
        top_left="┌", top_right="┐", bottom_left="└", bottom_right="┘",
    ),
    "rounded": BorderChars(
        top="─", right="│", bottom="─", left="│",
        top_left="╭", top_right="╮", bottom_left="╰", bottom_right="╯",
    ),
    "thick": BorderChars(
        top="━", right="┃", bottom="━", left="┃",
        top_left="┏", top_right="┓", bottom_left="┗", bottom_right="┛",
    ),
    "double": BorderChars(
        top="═", right="║", bottom="═", left="║",
        top_left="╔", top_right="╗", bottom_left="╚", bottom_right="╝",
    ),
    "ascii": BorderChars(
        top="-", right="|", bottom="-", left="|",
        top_left="+", top_right="+", bottom_left="+", bottom_right="+",
    ),
    "hidden": BorderChars(
        top=" ", right=" ", bottom=" ", left=" ",
        top_left=" ", top_right=" ", bottom_left=" ", bottom_right=" ",
    ),
}

PresetName = Literal["normal", "rounded", "thick", "double", "ascii", "hidden"]


# ─── Presets ─────────────────────────────────────────────────────────────────

def normal() -> BorderSpec:
    return BorderSpec(type="normal", chars=_CHARS["normal"])


def rounded() -> BorderSpec:
    return BorderSpec(type="rounded", chars=_CHARS["rounded"])


def thick() -> BorderSpec:
    return BorderSpec(type="thick", chars=_CHARS["thick"])


def double() -> BorderSpec:
    return BorderSpec(type="double", chars=_CHARS["double"])


def ascii() -> BorderSpec:  # noqa: A001
    return BorderSpec(type="ascii", chars=_CHARS["ascii"])


def hidden() -> BorderSpec:
    """Spaces on every side: takes up room without drawing anything."""
    return BorderSpec(type="hidden", chars=_CHARS["hidden"])


def preset(name: PresetName) -> BorderSpec:
    try:
        chars = _CHARS[name]
    except KeyError:
        raise ValueError(f"Unknown border preset {name!r}; expected one of {', '.join(_CHARS)}") from None
    return BorderSpec(type=name, chars=chars)  # type: ignore[arg-type]


def custom(
    chars: BorderChars | Mapping[str, str] | None = None,
    sides: Iterable[bool] | None = None,
    **glyphs: str,
) -> BorderSpec:
    """
    Build a border from any subset of glyphs; the rest come from normal().

    Glyphs can be passed as a mapping, as keyword arguments, or both (keywords
    win).
    """
    overrides: dict[str, str] = {}
    if isinstance(chars, BorderChars):
        overrides.update(chars.model_dump())
    elif chars:
        overrides.update(chars)
    overrides.update(glyphs)
    merged = {**_CHARS["normal"].model_dump(), **overrides}
    return BorderSpec(
        type="custom",
        chars=BorderChars(**merged),
        sides=tuple(sides) if sides is not None else ALL_SIDES,
    )


# ─── Operations ──────────────────────────────────────────────────────────────

def _side_index(side: str) -> int:
    try:
        return SIDE_NAMES.index(side)
    except ValueError:
        raise ValueError(f"Unknown border side {side!r}; expected one of {', '.join(SIDE_NAMES)}") from None


def with_sides(spec: BorderSpec, top: bool, right: bool, bottom: bool, left: bool) -> BorderSpec:
    return BorderSpec(type=spec.type, chars=spec.chars, sides=(top, right, bottom, left))


def with_chars(spec: BorderSpec, **glyphs: str) -> BorderSpec:
    """Replace some glyphs, keeping the type and sides."""
    return BorderSpec(
        type=spec.type,
        chars=BorderChars(**{**spec.chars.model_dump(), **glyphs}),
        sides=spec.sides,
    )


def top_only(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, True, False, False, False)


def right_only(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, False, True, False, False)


def bottom_only(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, False, False, True, False)


def left_only(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, False, False, False, True)


def horizontal_only(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, True, False, True, False)


def vertical_only(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, False, True, False, True)


def all_sides(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, True, True, True, True)


def no_sides(spec: BorderSpec) -> BorderSpec:
    return with_sides(spec, False, False, False, False)


def enable_sides(spec: BorderSpec, sides: Iterable[Side]) -> BorderSpec:
    """Enable exactly the named sides, disabling the others."""
    mask = [False, False, False, False]
    for side in sides:
        mask[_side_index(side)] = True
    return with_sides(spec, *mask)


def disable_sides(spec: BorderSpec, sides: Iterable[Side]) -> BorderSpec:
    """Disable the named sides, leaving the others as they are."""
    mask = list(spec.sides)
    for side in sides:
        mask[_side_index(side)] = False
    return with_sides(spec, *mask)


def toggle_side(spec: BorderSpec, side: Side) -> BorderSpec:
    mask = list(spec.sides)
    idx = _side_index(side)
    mask[idx] = not mask[idx]
    return with_sides(spec, *mask)


def convert_style(spec: BorderSpec, style: PresetName) -> BorderSpec:
    """Switch to another preset's glyphs, keeping the side mask."""
    converted = preset(style)
    return with_sides(converted, *spec.sides)


def merge(
    base: BorderSpec,
    *,
    type: BorderType | None = None,  # noqa: A002
    chars: Mapping[str, str] | None = None,
    sides: Iterable[bool] | None = None,
) -> BorderSpec:
    """Overlay the given fields on base; unspecified fields are kept."""
    return BorderSpec(
        type=type or base.type,
        chars=BorderChars(**{**base.chars.model_dump(), **(chars or {})}),
        sides=tuple(sides) if sides is not None else base.sides,
    )


def visible_sides(spec: BorderSpec) -> tuple[str, ...]:
    return tuple(name for name, on in zip(SIDE_NAMES, spec.sides) if on)


def has_visible_sides(spec: BorderSpec) -> bool:
    return any(spec.sides)


# ─── Rendering ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BorderDimensions:
    total_width: int
    total_height: int
    content_width: int
    content_height: int
    has_top: bool
    has_right: bool
    has_bottom: bool
    has_left: bool


def _content_lines(content: Content) -> list[str]:
    block = Block.of(content)
    # An empty block frames as zero interior lines: "┌┐\n└┘"
    return [] if block.is_empty else list(block.lines)


def _check_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def border_dimensions(
    spec: BorderSpec,
    content: Content,
    *,
    padding: int = 0,
    min_width: int = 0,
    min_height: int = 0,
) -> BorderDimensions:
    """Sizes frame() would produce for content, without rendering it."""
    _check_non_negative(padding=padding, min_width=min_width, min_height=min_height)
    lines = _content_lines(content)
    content_width = max([min_width, *(line_width(ln) for ln in lines)]) + padding * 2
    content_height = max(min_height, len(lines)) + padding * 2
    return BorderDimensions(
        total_width=content_width + spec.has_left + spec.has_right,
        total_height=content_height + spec.has_top + spec.has_bottom,
        content_width=content_width,
        content_height=content_height,
        has_top=spec.has_top,
        has_right=spec.has_right,
        has_bottom=spec.has_bottom,
        has_left=spec.has_left,
    )


def _edge(spec: BorderSpec, glyph: str, left_corner: str, right_corner: str, width: int) -> str:
    # A corner exists only where a side column meets the drawn edge
    return (
        (left_corner if spec.has_left else "")
        + glyph * width
        + (right_corner if spec.has_right else "")
    )


def frame(
    spec: BorderSpec,
    content: Content,
    *,
    padding: int = 0,
    min_width: int = 0,
    min_height: int = 0,
) -> str:
    """
    Draw spec's border around content.

    The interior is as wide as the widest line (or min_width) plus padding on
    each side. When the right side is drawn, shorter lines are filled with
    spaces so the right edge stays straight; otherwise lines are left as-is.
    Raises ValueError for negative padding or minimum sizes.
    """
    dims = border_dimensions(spec, content, padding=padding, min_width=min_width, min_height=min_height)
    lines = _content_lines(content)
    chars = spec.chars
    inner = dims.content_width

    interior: list[str] = [""] * padding
    interior.extend(" " * padding + ln for ln in lines)
    interior.extend([""] * (dims.content_height - padding - len(interior)))
    interior.extend([""] * padding)

    out: list[str] = []
    if spec.has_top:
        out.append(_edge(spec, chars.top, chars.top_left, chars.top_right, inner))
    for ln in interior:
        body = pad_to_width(ln, inner) if spec.has_right else ln
        out.append(
            (chars.left if spec.has_left else "")
            + body
            + (chars.right if spec.has_right else "")
        )
    if spec.has_bottom:
        out.append(_edge(spec, chars.bottom, chars.bottom_left, chars.bottom_right, inner))
    return "\n".join(out)


def frame_block(spec: BorderSpec, content: Content, **options: int) -> Block:
    return Block.of(frame(spec, content, **options))
