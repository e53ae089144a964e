"""Runtime composition layer for ccexp.

Resolves theme and logging, builds the scanner and action collaborators,
and runs the browser inside the terminal's raw mode.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import partial
from pathlib import Path

from ..actions import ActionContext
from ..actions.editor import EditorConfig, launch_editor
from ..config import load_theme_name, save_theme_name
from ..errors import ScanError
from ..file_model import FileRecord, group_label
from ..file_model.catalog import scan_claude_files
from ..logging_setup import configure_logging
from ..navigation import build_navigation_state
from ..preview import DEFAULT_STYLE
from ..render import build_loading_screen, frame_to_text
from ..terminal import TerminalController
from ..ui_theme import normalize_theme_name, resolve_theme
from .loop import run_main_loop
from .session import BrowserSession

logger = logging.getLogger(__name__)


def format_file_listing(files: list[FileRecord]) -> str:
    """Plain grouped listing used when stdin is not a terminal."""
    state = build_navigation_state(files)
    out: list[str] = []
    for group in state.groups:
        out.append(f"{group_label(group.file_type)} ({group.count})")
        out.extend(f"  {record.path}" for record in group.files)
    return "\n".join(out) + ("\n" if out else "")


def _resolve_theme_name(theme_name: str | None) -> str:
    if theme_name:
        normalized = normalize_theme_name(theme_name)
        save_theme_name(normalized)
        return normalized
    return normalize_theme_name(load_theme_name())


def run_app(
    root: Path,
    *,
    recursive: bool = True,
    theme_name: str | None = None,
    no_color: bool = False,
    style: str = DEFAULT_STYLE,
) -> None:
    """Scan ``root`` and browse the result interactively."""
    log_path = configure_logging()
    logger.info("starting in %s (recursive=%s, log=%s)", root, recursive, log_path)
    scanner = partial(scan_claude_files, root, recursive=recursive)

    if not os.isatty(sys.stdin.fileno()):
        try:
            files = scanner()
        except ScanError as exc:
            raise SystemExit(f"Error: {exc}") from exc
        sys.stdout.write(format_file_listing(files))
        return

    theme = resolve_theme(_resolve_theme_name(theme_name), no_color=no_color)
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())

    def run_editor(target: Path, config: EditorConfig) -> None:
        launch_editor(target, config, terminal.disable_tui_mode, terminal.enable_tui_mode)

    context = ActionContext(run_editor=run_editor)
    with terminal.raw_mode():
        columns, lines = terminal.size()
        terminal.write(frame_to_text(build_loading_screen(columns, lines, theme)))
        session = BrowserSession(
            scanner,
            action_context=context,
            theme=theme,
            style=style,
            no_color=no_color,
        )
        run_main_loop(session, terminal.stdin_fd, terminal.write, terminal.size)
    logger.info("exiting")
