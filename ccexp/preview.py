"""Preview loading, sanitization, and syntax highlighting.

Loads at most ``MAX_PREVIEW_BYTES`` of a file, refuses binary content, and
neutralizes terminal control bytes before Pygments colors the text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

MAX_PREVIEW_BYTES = 1024 * 1024
BINARY_SNIFF_BYTES = 8000
DEFAULT_STYLE = "monokai"
TRUNCATION_NOTICE = "\n\n... (file truncated due to size limit) ..."

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def read_text(path: Path) -> str:
    """Read text exactly as stored, line endings included.

    Decodes as UTF-8 (dropping a leading BOM) and falls back to latin-1,
    which accepts any byte sequence.
    """
    raw = path.read_bytes()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def is_binary_bytes(head: bytes) -> bool:
    return b"\x00" in head


@dataclass(frozen=True)
class PreviewDocument:
    """Loaded preview text, or the reason it could not be loaded."""

    path: Path
    text: str = ""
    truncated: bool = False
    error: str | None = None

    @property
    def line_count(self) -> int:
        return len(self.text.split("\n")) if self.text else 0


def load_preview(path: Path, max_bytes: int = MAX_PREVIEW_BYTES) -> PreviewDocument:
    """Read ``path`` for preview; failures are reported, never raised."""
    try:
        with path.open("rb") as handle:
            raw = handle.read(max_bytes + 1)
    except OSError as exc:
        return PreviewDocument(path=path, error=f"Failed to read file: {exc.strerror or exc}")

    if is_binary_bytes(raw[:BINARY_SNIFF_BYTES]):
        return PreviewDocument(path=path, error="Binary file cannot be previewed")

    truncated = len(raw) > max_bytes
    data = raw[:max_bytes]
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        text = data.decode("utf-8", errors="replace")
    text = sanitize_terminal_text(text)
    if truncated:
        text += TRUNCATION_NOTICE
    return PreviewDocument(path=path, text=text, truncated=truncated)


@lru_cache(maxsize=8)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    return Terminal256Formatter(style=style)


def colorize_preview(text: str, path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return ``text`` highlighted for ``path``'s file type."""
    if no_color or not text:
        return text
    try:
        lexer = get_lexer_for_filename(path.name, text)
    except ClassNotFound:
        lexer = TextLexer()
    rendered = pygments_highlight(text, lexer, _formatter_for_style(style))
    # Pygments always appends a trailing newline.
    if not text.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
