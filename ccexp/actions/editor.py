"""Editor launch helper for the Edit File action.

The editor command is resolved from the environment once per invocation and
passed in explicitly. Raw/alternate-screen TUI mode is suspended while the
editor owns the terminal.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from ..errors import EditorLaunchFailure, EditorNotConfigured, EditorNotFound

logger = logging.getLogger(__name__)

EDITOR_ENV_VARS: tuple[str, ...] = ("EDITOR", "VISUAL")


@dataclass(frozen=True)
class EditorConfig:
    """Resolved editor argv and the variable it came from."""

    command: tuple[str, ...] = ()
    source: str | None = None

    @property
    def configured(self) -> bool:
        return bool(self.command)


def resolve_editor_config(environ: Mapping[str, str] | None = None) -> EditorConfig:
    """Return the first non-empty editor variable from ``EDITOR_ENV_VARS``."""
    env = os.environ if environ is None else environ
    for name in EDITOR_ENV_VARS:
        raw = env.get(name, "").strip()
        if not raw:
            continue
        try:
            command = tuple(shlex.split(raw))
        except ValueError:
            command = (raw,)
        if command:
            return EditorConfig(command=command, source=name)
    return EditorConfig()


def _noop() -> None:
    return None


def launch_editor(
    target: Path,
    config: EditorConfig,
    disable_tui_mode: Callable[[], None] = _noop,
    enable_tui_mode: Callable[[], None] = _noop,
) -> None:
    """Run the configured editor on ``target`` and wait for it to exit."""
    if not config.configured:
        raise EditorNotConfigured(
            "No editor configured. Set $EDITOR or $VISUAL (e.g. export EDITOR=vim)."
        )

    argv = [*config.command, str(target)]
    logger.info("launching editor from $%s: %s", config.source, argv)
    disable_tui_mode()
    try:
        proc = subprocess.run(argv, check=False)
    except FileNotFoundError as exc:
        raise EditorNotFound(
            f"Editor command not found: {config.command[0]} (check ${config.source})"
        ) from exc
    except OSError as exc:
        raise EditorLaunchFailure(f"Failed to launch editor: {exc}") from exc
    finally:
        enable_tui_mode()

    if proc.returncode != 0:
        raise EditorLaunchFailure(f"Editor exited with status {proc.returncode}")
