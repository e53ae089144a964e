"""Open a path with the platform's default application."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys


def opener_command(path: str) -> list[str] | None:
    """Return the opener argv for ``path``, or ``None`` on Windows."""
    if sys.platform == "darwin":
        return ["open", path]
    if os.name == "nt":
        return None
    return [shutil.which("xdg-open") or "xdg-open", path]


def open_with_default_application(path: str) -> None:
    """Hand ``path`` to the default application; raises ``OSError`` or
    ``subprocess.CalledProcessError`` on failure."""
    command = opener_command(path)
    if command is None:
        os.startfile(path)  # type: ignore[attr-defined]
        return
    subprocess.run(
        command,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        check=True,
    )
