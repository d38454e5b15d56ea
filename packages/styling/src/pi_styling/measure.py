"""
Measurement engine — visible width and height of styled text.

Provides:
- char_width() / grapheme_width(): terminal columns of one code point / cluster
- split_graphemes(): approximate grapheme clusters (base + combining marks)
- line_width(): visible width of one line, escape sequences excluded
- block_width() / block_height() / block_size(): dimensions of multi-line text
- Block: immutable, measured list of lines

Widths come from wcwidth: combining marks are 0 columns, East-Asian Wide and
Fullwidth code points are 2, everything else 1.
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import Union

from wcwidth import wcwidth

from . import config
from .ansi import strip

_ZWJ = "\u200d"
_VS15 = "\ufe0e"
_VS16 = "\ufe0f"
_KEYCAP = "\u20e3"

# ─────────────────────────────────────────────────────────────────────────────
# Width cache (bounded; oldest entry evicted first)
# ─────────────────────────────────────────────────────────────────────────────
_width_cache: dict[str, int] = {}


def _is_regional_indicator(ch: str) -> bool:
    return 0x1F1E6 <= ord(ch) <= 0x1F1FF


def _is_skin_tone(ch: str) -> bool:
    return 0x1F3FB <= ord(ch) <= 0x1F3FF


def _extends_cluster(ch: str) -> bool:
    if ch in (_VS15, _VS16, _KEYCAP) or _is_skin_tone(ch):
        return True
    return unicodedata.category(ch) in ("Mn", "Me")


def char_width(ch: str) -> int:
    """Columns occupied by a single code point."""
    if ch == "\t":
        return config.TAB_WIDTH
    w = wcwidth(ch)
    if w >= 0:
        return w
    if unicodedata.category(ch) == "Cc":
        return 0
    return 1


def split_graphemes(text: str) -> list[str]:
    """
    Segment text into grapheme clusters.

    A base code point absorbs the combining marks, variation selectors and
    skin-tone modifiers after it, plus any code point joined with ZWJ.
    Regional indicators pair up into flags.
    """
    clusters: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        start = i
        i += 1
        if _is_regional_indicator(text[start]) and i < n and _is_regional_indicator(text[i]):
            i += 1
        while i < n:
            ch = text[i]
            if ch == _ZWJ:
                i += 2 if i + 1 < n else 1
                continue
            if _extends_cluster(ch):
                i += 1
                continue
            break
        clusters.append(text[start:i])
    return clusters


def grapheme_width(cluster: str) -> int:
    """Columns occupied by one grapheme cluster."""
    if not cluster:
        return 0
    base = cluster[0]
    if len(cluster) > 1:
        # Emoji presentation, ZWJ sequences, flags and modified emoji are wide
        if _VS16 in cluster or _ZWJ in cluster or _is_regional_indicator(base):
            return 2
        if any(_is_skin_tone(ch) for ch in cluster[1:]):
            return 2
    return char_width(base)


def line_width(line: str) -> int:
    """Visible column width of a single line."""
    if not line:
        return 0

    # Fast path: printable ASCII
    if line.isascii() and line.isprintable():
        return len(line)

    cached = _width_cache.get(line)
    if cached is not None:
        return cached

    width = sum(grapheme_width(g) for g in split_graphemes(strip(line)))

    if len(_width_cache) >= config.WIDTH_CACHE_SIZE:
        _width_cache.pop(next(iter(_width_cache)), None)
    _width_cache[line] = width
    return width


# ─────────────────────────────────────────────────────────────────────────────
# Blocks
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Block:
    """
    Styled text split into lines, with its measured width and height.

    Build one with Block.of(text). Instances never change; every layout
    operation returns new text instead.
    """

    lines: tuple[str, ...]
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self) -> None:
        lines = tuple(self.lines)
        object.__setattr__(self, "lines", lines)
        object.__setattr__(self, "width", max((line_width(ln) for ln in lines), default=0))
        object.__setattr__(self, "height", len(lines))

    @classmethod
    def of(cls, content: Content) -> Block:
        if isinstance(content, Block):
            return content
        return cls(tuple(content.split("\n")))

    @classmethod
    def empty(cls) -> Block:
        """A block with no lines at all."""
        return cls(())

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def is_empty(self) -> bool:
        """True for no lines or a single empty line."""
        return self.height == 0 or self.lines == ("",)

    def __str__(self) -> str:
        return self.text


Content = Union[str, Block]


def block_width(content: Content) -> int:
    """Widest visible line; 0 for empty content."""
    if isinstance(content, Block):
        return content.width
    if not content:
        return 0
    return max(line_width(ln) for ln in content.split("\n"))


def block_height(content: Content) -> int:
    """Number of lines. An empty string is one (empty) line."""
    if isinstance(content, Block):
        return content.height
    return content.count("\n") + 1


def block_size(content: Content) -> tuple[int, int]:
    return block_width(content), block_height(content)
