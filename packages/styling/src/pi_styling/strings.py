"""
Column-aware string helpers for styled text.

Provides:
- slice_by_column() / slice_with_width(): extract a range of visible columns
- truncate_to_width(): cut to a width with an ellipsis, escape sequences kept
- pad_to_width(): pad a line to a width, anchored by an alignment
- repeat_to_width(): repeat a pattern and cut it to an exact width
- wrap_to_width(): word-wrap text, carrying styles across the new breaks
- indent() / dedent(): add or remove leading indentation on every line

All of these work in terminal columns, not code points.
"""
from __future__ import annotations

from typing import NamedTuple

from .align import LEFT, Alignment, split_space
from .ansi import RESET, AnsiCodeTracker, segments
from .measure import grapheme_width, line_width, split_graphemes


class SliceResult(NamedTuple):
    text: str
    width: int


def slice_with_width(line: str, start_col: int, length: int, strict: bool = False) -> SliceResult:
    """
    Extract visible columns [start_col, start_col + length) from a line.

    Escape sequences seen before the range are carried into the result so the
    slice keeps its styling. With strict=True a wide grapheme straddling the
    end of the range is dropped instead of overflowing it.
    """
    if length <= 0:
        return SliceResult("", 0)

    end_col = start_col + length
    parts: list[str] = []
    carried = ""
    taken = 0
    col = 0

    for seg in segments(line):
        if col >= end_col:
            break
        if seg.is_control:
            if col < start_col:
                carried += seg.text
            else:
                parts.append(seg.text)
            continue
        for g in split_graphemes(seg.text):
            w = grapheme_width(g)
            if col >= start_col and (not strict or col + w <= end_col):
                if carried:
                    parts.append(carried)
                    carried = ""
                parts.append(g)
                taken += w
            col += w
            if col >= end_col:
                break

    return SliceResult("".join(parts), taken)


def slice_by_column(line: str, start_col: int, length: int, strict: bool = False) -> str:
    return slice_with_width(line, start_col, length, strict).text


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...", pad: bool = False) -> str:
    """
    Truncate a line to max_width columns, appending ellipsis when cut.

    Escape sequences are preserved and do not count toward the width; a reset
    is inserted before the ellipsis so it is never styled by the cut text.
    """
    text_width = line_width(text)
    if text_width <= max_width:
        if pad:
            return text + " " * (max_width - text_width)
        return text

    ellipsis_width = line_width(ellipsis)
    target_width = max_width - ellipsis_width
    if target_width <= 0:
        return slice_by_column(ellipsis, 0, max_width, strict=True) if max_width > 0 else ""

    cut = slice_by_column(text, 0, target_width, strict=True)
    truncated = f"{cut}{RESET}{ellipsis}"
    if pad:
        return truncated + " " * max(0, max_width - line_width(truncated))
    return truncated


def pad_to_width(line: str, width: int, fill: str = " ", align: Alignment = LEFT) -> str:
    """
    Pad line with fill to width columns; wider lines are returned unchanged.

    align places the line inside the padded width (0 = left, 1 = right), with
    the extra column of an odd split going to the right. Raises ValueError for
    a fill that has no visible width.
    """
    if line_width(fill) <= 0:
        raise ValueError(f"Fill must have a visible width, got {fill!r}")
    left, right = split_space(width - line_width(line), align)
    return repeat_to_width(fill, left) + line + repeat_to_width(fill, right)


def repeat_to_width(pattern: str, width: int) -> str:
    """
    Repeat pattern to fill exactly width columns.

    The last repetition is cut at a column boundary; a wide grapheme that does
    not fit is replaced by spaces.
    """
    if width <= 0 or not pattern:
        return ""
    pattern_width = line_width(pattern)
    if pattern_width <= 0:
        return ""

    full, remainder = divmod(width, pattern_width)
    result = pattern * full
    if remainder:
        tail = slice_with_width(pattern, 0, remainder, strict=True)
        result += tail.text + " " * (remainder - tail.width)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Word wrapping
# ─────────────────────────────────────────────────────────────────────────────

def _break_word(word: str, width: int) -> list[str]:
    """Split one word into pieces of at most width columns (one grapheme minimum)."""
    pieces: list[str] = []
    current = ""
    current_width = 0
    pending = ""

    for seg in segments(word):
        if seg.is_control:
            pending += seg.text
            continue
        for g in split_graphemes(seg.text):
            w = grapheme_width(g)
            if current_width and current_width + w > width:
                pieces.append(current)
                current, current_width = "", 0
            current += pending + g
            current_width += w
            pending = ""

    pieces.append(current + pending)
    return pieces


def wrap_to_width(text: str, width: int, *, break_words: bool = False, indent: str = "") -> list[str]:
    """
    Word-wrap text so every line fits in width columns, indent included.

    Words are split on single spaces and each paragraph ("\\n") wraps on its
    own. A word wider than the line is kept whole unless break_words is set,
    in which case it is cut at column boundaries. A style still active at a
    break is closed with a reset and reopened on the next line. A width of
    zero or less returns the text unwrapped.
    """
    if width <= 0:
        return [text]

    indent_width = line_width(indent)
    tracker = AnsiCodeTracker()
    lines: list[str] = []
    opening = ""

    def emit(body: str) -> None:
        nonlocal opening
        tracker.feed(body)
        line = opening + body
        if tracker.has_active_codes():
            line += RESET
        lines.append(indent + line)
        opening = tracker.get_active_codes()

    for paragraph in text.split("\n"):
        if paragraph == "":
            lines.append("")
            continue

        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if indent_width + line_width(candidate) <= width:
                current = candidate
                continue
            if current:
                emit(current)
                current = ""
            if indent_width + line_width(word) <= width:
                current = word
            elif break_words:
                *full, current = _break_word(word, max(1, width - indent_width))
                for piece in full:
                    emit(piece)
            else:
                emit(word)
        if current:
            emit(current)

    return lines


# ─────────────────────────────────────────────────────────────────────────────
# Indentation
# ─────────────────────────────────────────────────────────────────────────────

def indent(text: str, by: str | int) -> str:
    """Prefix every line with by (a string, or a number of spaces)."""
    prefix = " " * by if isinstance(by, int) else by
    return "\n".join(prefix + line for line in text.split("\n"))


def dedent(text: str) -> str:
    """Remove the leading whitespace common to all non-blank lines."""
    lines = text.split("\n")
    margins = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    common = min(margins, default=0)
    if common == 0:
        return text
    return "\n".join(line[common:] for line in lines)
