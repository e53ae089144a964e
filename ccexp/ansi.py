"""ANSI-aware text measurement and line shaping utilities.

Rows mix escape sequences, emoji icons, and wide characters; these helpers
measure and clip by terminal cell so the two panes stay aligned.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
_VARIATION_SELECTORS = {"\ufe0e", "\ufe0f"}


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop; combining marks and variation
    selectors take no columns; wide/fullwidth characters take two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch) or ch in _VARIATION_SELECTORS:
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def iter_cells(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(chunk, width)`` pairs; escape sequences come out with width 0.

    Tabs are yielded already expanded to spaces.
    """
    col = 0
    pos = 0
    while pos < len(text):
        if text[pos] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, pos)
            if match:
                yield match.group(0), 0
                pos = match.end()
                continue
        ch = text[pos]
        width = char_display_width(ch, col)
        yield (" " * width if ch == "\t" else ch), width
        col += width
        pos += 1


def display_width(text: str) -> int:
    """Return visible terminal width of ``text``, ignoring ANSI sequences."""
    return sum(width for _chunk, width in iter_cells(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences before the cut are kept; a wide character that would
    straddle the edge is dropped.
    """
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    for chunk, width in iter_cells(text):
        if col + width > max_cols:
            break
        out.append(chunk)
        col += width
    return "".join(out)


def fit_ansi_line(text: str, width: int, reset: str = "\033[0m") -> str:
    """Clip ``text`` to ``width`` columns and pad with spaces to exactly ``width``."""
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text, width)
    if "\x1b" in clipped and reset:
        clipped += reset
    return clipped + " " * max(0, width - display_width(clipped))
