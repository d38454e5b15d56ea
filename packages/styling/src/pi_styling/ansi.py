"""
Escape-sequence model.

Provides:
- segments(): lazy, restartable split of a string into Control / Visible runs
- extract_ansi_code(): the escape sequence starting at a position
- strip() / has_escapes(): derived operations over the segment stream
- AnsiCodeTracker: track active SGR attributes through a run of sequences
- sequence builders: SGR constants, wrap(), hyperlink(), cursor and screen helpers

Scanning is fail-soft: an unterminated or truncated escape introducer is
reported as a Control run consuming the rest of the string, never as an error.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterator, NamedTuple

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Control characters
# ─────────────────────────────────────────────────────────────────────────────

ESC = "\x1b"
CSI = f"{ESC}["
OSC = f"{ESC}]"
BEL = "\x07"
ST = f"{ESC}\\"

# Single-byte (C1) control sequence introducer
_C1_CSI = "\x9b"

# Introducers of string-type sequences: OSC, DCS, SOS, PM, APC
_STRING_INTRODUCERS = frozenset("]PX^_")


# ─────────────────────────────────────────────────────────────────────────────
# Segments
# ─────────────────────────────────────────────────────────────────────────────

class SegmentKind(Enum):
    CONTROL = "control"
    VISIBLE = "visible"


class Segment(NamedTuple):
    kind: SegmentKind
    text: str

    @property
    def is_control(self) -> bool:
        return self.kind is SegmentKind.CONTROL


class AnsiCode(NamedTuple):
    code: str
    length: int


def _truncated(s: str, pos: int) -> AnsiCode:
    logger.debug("Unterminated escape sequence at offset %d; consuming %d chars", pos, len(s) - pos)
    return AnsiCode(s[pos:], len(s) - pos)


def _scan_csi(s: str, pos: int, body: int) -> AnsiCode:
    # parameter bytes 0x30-0x3F, intermediate bytes 0x20-0x2F, final byte 0x40-0x7E
    j = body
    while j < len(s) and 0x20 <= ord(s[j]) <= 0x3F:
        j += 1
    if j >= len(s):
        return _truncated(s, pos)
    if 0x40 <= ord(s[j]) <= 0x7E:
        return AnsiCode(s[pos:j + 1], j + 1 - pos)
    # Malformed: the sequence ends before the offending character
    return AnsiCode(s[pos:j], j - pos)


def _scan_string(s: str, pos: int) -> AnsiCode:
    j = pos + 2
    while j < len(s):
        if s[j] == BEL:
            return AnsiCode(s[pos:j + 1], j + 1 - pos)
        if s[j] == ESC and j + 1 < len(s) and s[j + 1] == "\\":
            return AnsiCode(s[pos:j + 2], j + 2 - pos)
        j += 1
    return _truncated(s, pos)


def extract_ansi_code(s: str, pos: int) -> AnsiCode | None:
    """Extract the escape sequence starting at pos. Returns None if there is none."""
    if pos >= len(s):
        return None
    ch = s[pos]
    if ch == _C1_CSI:
        return _scan_csi(s, pos, pos + 1)
    if ch != ESC:
        return None
    if pos + 1 >= len(s):
        return _truncated(s, pos)

    next_ch = s[pos + 1]
    if next_ch == "[":
        return _scan_csi(s, pos, pos + 2)
    if next_ch in _STRING_INTRODUCERS:
        return _scan_string(s, pos)

    cp = ord(next_ch)
    if 0x20 <= cp <= 0x2F:
        # nF escape, e.g. ESC ( B
        j = pos + 1
        while j < len(s) and 0x20 <= ord(s[j]) <= 0x2F:
            j += 1
        if j >= len(s):
            return _truncated(s, pos)
        return AnsiCode(s[pos:j + 1], j + 1 - pos)
    if 0x30 <= cp <= 0x7E:
        # Fp / Fe / Fs escape, e.g. ESC 7, ESC c
        return AnsiCode(s[pos:pos + 2], 2)

    # A lone ESC in front of something that is not a sequence
    return AnsiCode(ESC, 1)


def _could_have_escapes(text: str) -> bool:
    return ESC in text or _C1_CSI in text


def _scan(text: str) -> Iterator[Segment]:
    control: list[str] = []
    visible_start = 0
    i = 0
    n = len(text)
    while i < n:
        ansi = extract_ansi_code(text, i)
        if ansi is None:
            if control:
                yield Segment(SegmentKind.CONTROL, "".join(control))
                control = []
                visible_start = i
            i += 1
            continue
        if i > visible_start and not control:
            yield Segment(SegmentKind.VISIBLE, text[visible_start:i])
        control.append(ansi.code)
        i += ansi.length
        visible_start = i
    if control:
        yield Segment(SegmentKind.CONTROL, "".join(control))
    elif visible_start < n:
        yield Segment(SegmentKind.VISIBLE, text[visible_start:])


class Segments:
    """
    Alternating Control / Visible runs of a string.

    Iteration is lazy and every iter() starts a fresh scan, so the same object
    can be walked any number of times.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __iter__(self) -> Iterator[Segment]:
        if not _could_have_escapes(self._text):
            if self._text:
                return iter((Segment(SegmentKind.VISIBLE, self._text),))
            return iter(())
        return _scan(self._text)

    def __repr__(self) -> str:
        return f"Segments({self._text!r})"


def segments(text: str) -> Segments:
    """Split text into Control / Visible runs."""
    return Segments(text)


def strip(text: str) -> str:
    """Remove every escape sequence, keeping visible content in order."""
    if not _could_have_escapes(text):
        return text
    return "".join(seg.text for seg in _scan(text) if seg.kind is SegmentKind.VISIBLE)


def has_escapes(text: str) -> bool:
    """True if text contains at least one escape sequence."""
    if not _could_have_escapes(text):
        return False
    return any(seg.is_control for seg in _scan(text))


# ─────────────────────────────────────────────────────────────────────────────
# SGR state tracking
# ─────────────────────────────────────────────────────────────────────────────

_SGR_RE = re.compile(r"(?:\x1b\[|\x9b)([\d;:]*)m")

# SGR parameters that switch an attribute on; the attribute is keyed by its code
_ATTR_ON = frozenset((1, 2, 3, 4, 5, 6, 7, 8, 9))

# SGR parameters that switch attributes off, and which ones
_ATTR_OFF: dict[int, tuple[int, ...]] = {
    21: (1,),
    22: (1, 2),
    23: (3,),
    24: (4,),
    25: (5, 6),
    27: (7,),
    28: (8,),
    29: (9,),
}

# Extended colour introducers and the slot they set
_EXTENDED = {38: "fg", 48: "bg"}

# Extended colour mode (256-colour, truecolor) -> parameters that follow it
_COLOR_ARITY = {5: 1, 2: 3}

# Basic and bright colours -> slot; codes restoring a slot's default
_BASIC_COLORS: dict[int, str] = {
    **{code: "fg" for code in (*range(30, 38), *range(90, 98))},
    **{code: "bg" for code in (*range(40, 48), *range(100, 108))},
}
_DEFAULT_COLORS = {39: "fg", 49: "bg"}


def is_sgr(code: str) -> bool:
    """True if code is a single Select Graphic Rendition sequence."""
    return _SGR_RE.fullmatch(code) is not None


def is_sgr_only(text: str) -> bool:
    """True if text consists solely of SGR sequences (vacuously true for '')."""
    i = 0
    while i < len(text):
        ansi = extract_ansi_code(text, i)
        if ansi is None or not is_sgr(ansi.code):
            return False
        i += ansi.length
    return True


class AnsiCodeTracker:
    """Track active SGR attributes so a style can be restored at any point."""

    __slots__ = ("_attrs", "_colors")

    def __init__(self) -> None:
        self._attrs: set[int] = set()
        self._colors: dict[str, str] = {}

    def clear(self) -> None:
        self._attrs.clear()
        self._colors.clear()

    def copy(self) -> AnsiCodeTracker:
        other = AnsiCodeTracker()
        other._attrs = set(self._attrs)
        other._colors = dict(self._colors)
        return other

    def process(self, ansi_code: str) -> None:
        """Update state from one escape sequence. Non-SGR sequences are ignored."""
        m = _SGR_RE.fullmatch(ansi_code)
        if not m:
            return
        params = [int(p) if p else 0 for p in m.group(1).replace(":", ";").split(";")]

        i = 0
        while i < len(params):
            code = params[i]
            slot = _EXTENDED.get(code)
            mode = params[i + 1] if i + 1 < len(params) else None
            arity = _COLOR_ARITY.get(mode, 0)
            if slot:
                # an extended colour consumes its mode and operands even when incomplete
                if arity and i + 1 + arity < len(params):
                    self._colors[slot] = ";".join(str(p) for p in params[i:i + 2 + arity])
                i += 2 + arity
                continue

            if code == 0:
                self.clear()
            elif code in _ATTR_ON:
                self._attrs.add(code)
            elif code in _ATTR_OFF:
                self._attrs.difference_update(_ATTR_OFF[code])
            elif code in _DEFAULT_COLORS:
                self._colors.pop(_DEFAULT_COLORS[code], None)
            elif code in _BASIC_COLORS:
                self._colors[_BASIC_COLORS[code]] = str(code)
            i += 1

    def feed(self, text: str) -> None:
        """Process every escape sequence found in text."""
        i = 0
        while i < len(text):
            ansi = extract_ansi_code(text, i)
            if ansi:
                self.process(ansi.code)
                i += ansi.length
            else:
                i += 1

    def get_active_codes(self) -> str:
        """Return the SGR sequence that recreates the current state, or ''."""
        codes = [str(c) for c in sorted(self._attrs)]
        codes.extend(self._colors[slot] for slot in ("fg", "bg") if slot in self._colors)
        if not codes:
            return ""
        return f"{CSI}{';'.join(codes)}m"

    def has_active_codes(self) -> bool:
        return bool(self._attrs or self._colors)


# ─────────────────────────────────────────────────────────────────────────────
# Sequence builders
# ─────────────────────────────────────────────────────────────────────────────

RESET = f"{CSI}0m"
RESET_FOREGROUND = f"{CSI}39m"
RESET_BACKGROUND = f"{CSI}49m"

BOLD = f"{CSI}1m"
FAINT = f"{CSI}2m"
ITALIC = f"{CSI}3m"
UNDERLINE = f"{CSI}4m"
BLINK = f"{CSI}5m"
REVERSE = f"{CSI}7m"
STRIKETHROUGH = f"{CSI}9m"

RESET_BOLD = f"{CSI}22m"
RESET_FAINT = f"{CSI}22m"
RESET_ITALIC = f"{CSI}23m"
RESET_UNDERLINE = f"{CSI}24m"
RESET_BLINK = f"{CSI}25m"
RESET_REVERSE = f"{CSI}27m"
RESET_STRIKETHROUGH = f"{CSI}29m"


def wrap(text: str, *codes: str) -> str:
    """Prefix text with codes and close it with a full reset."""
    if not codes or text == "":
        return text
    return f"{''.join(codes)}{text}{RESET}"


def sequence(*codes: str) -> str:
    return "".join(code for code in codes if code)


def hyperlink(url: str, text: str) -> str:
    """OSC 8 hyperlink around text."""
    return f"{OSC}8;;{url}{ST}{text}{OSC}8;;{ST}"


def cursor_up(n: int = 1) -> str:
    return f"{CSI}{n}A"


def cursor_down(n: int = 1) -> str:
    return f"{CSI}{n}B"


def cursor_right(n: int = 1) -> str:
    return f"{CSI}{n}C"


def cursor_left(n: int = 1) -> str:
    return f"{CSI}{n}D"


def cursor_next_line(n: int = 1) -> str:
    return f"{CSI}{n}E"


def cursor_prev_line(n: int = 1) -> str:
    return f"{CSI}{n}F"


def cursor_column(n: int) -> str:
    return f"{CSI}{n}G"


def cursor_position(row: int, col: int) -> str:
    return f"{CSI}{row};{col}H"


def cursor_save() -> str:
    return f"{CSI}s"


def cursor_restore() -> str:
    return f"{CSI}u"


def cursor_hide() -> str:
    return f"{CSI}?25l"


def cursor_show() -> str:
    return f"{CSI}?25h"


def clear_screen() -> str:
    return f"{CSI}2J"


def clear_line() -> str:
    return f"{CSI}2K"


def clear_to_end() -> str:
    return f"{CSI}0K"


def clear_to_start() -> str:
    return f"{CSI}1K"


def scroll_up(n: int = 1) -> str:
    return f"{CSI}{n}S"


def scroll_down(n: int = 1) -> str:
    return f"{CSI}{n}T"
