"""Main interactive event loop for the terminal UI.

Polls the session between key reads so finished actions and expiring
status messages redraw without waiting for input.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..input import normalize_enter, read_key
from ..render import frame_to_text
from .session import BrowserSession


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 100


def run_main_loop(
    session: BrowserSession,
    stdin_fd: int,
    write: Callable[[str], None],
    terminal_size: Callable[[], tuple[int, int]],
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    read: Callable[..., str] = read_key,
) -> None:
    """Run until the session asks to quit."""
    dirty = True
    last_size: tuple[int, int] | None = None
    skip_next_lf = False
    while not session.should_quit:
        size = terminal_size()
        if size != last_size:
            last_size = size
            dirty = True
        if session.poll():
            dirty = True
        if dirty:
            columns, lines = size
            write(frame_to_text(session.build_frame(columns, lines)))
            dirty = False

        try:
            key = read(stdin_fd, timeout_ms=timing.key_timeout_ms)
        except KeyboardInterrupt:
            key = "CTRL_C"
        if key == "":
            continue
        key, skip_next_lf = normalize_enter(key, skip_next_lf)
        if session.handle_key(key):
            dirty = True
