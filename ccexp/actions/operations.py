"""The six per-file menu actions and their collaborators.

Each action returns a success message prefixed with ``✅``, a
``ConfirmationRequest`` (Copy To Directory only), or raises an
``ActionError``. Collaborators are injected through ``ActionContext`` so the
actions can be exercised without a clipboard, opener, or editor.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from ..errors import (
    ActionFailure,
    ClipboardFailure,
    DestinationCheckFailure,
    OpenerFailure,
    ReadFailure,
)
from ..file_model import FileRecord, FileType
from ..preview import read_text
from .clipboard import copy_text_to_clipboard
from .editor import EditorConfig, launch_editor, resolve_editor_config
from .opener import open_with_default_application
from .types import ActionResult, ConfirmationRequest, MenuAction

logger = logging.getLogger(__name__)

COMMANDS_MARKER = (".claude", "commands")


@dataclass(frozen=True)
class ActionContext:
    """External collaborators used by the actions.

    ``environ`` of ``None`` means the process environment, read at the moment
    the Edit File action runs.
    """

    copy_text: Callable[[str], bool] = copy_text_to_clipboard
    open_path: Callable[[str], None] = open_with_default_application
    run_editor: Callable[[Path, EditorConfig], None] = field(default=launch_editor)
    get_cwd: Callable[[], Path] = Path.cwd
    environ: Mapping[str, str] | None = None


def _write_clipboard(context: ActionContext, text: str) -> None:
    try:
        copied = context.copy_text(text)
    except Exception as exc:
        raise ClipboardFailure(f"Failed to copy to clipboard: {exc}") from exc
    if not copied:
        raise ClipboardFailure("Failed to copy to clipboard: no clipboard command available")


def _os_reason(exc: OSError) -> str:
    return exc.strerror or str(exc) or type(exc).__name__


def copy_content(record: FileRecord, context: ActionContext) -> str:
    try:
        content = read_text(Path(record.path))
    except OSError as exc:
        raise ReadFailure(f"Cannot read {record.path}: {_os_reason(exc)}") from exc
    _write_clipboard(context, content)
    return "✅ Content copied to clipboard"


def copy_absolute_path(record: FileRecord, context: ActionContext) -> str:
    # abspath is purely lexical; the file need not exist.
    _write_clipboard(context, os.path.abspath(record.path))
    return "✅ Absolute path copied to clipboard"


def copy_relative_path(record: FileRecord, context: ActionContext) -> str:
    _write_clipboard(context, record.path)
    return "✅ Relative path copied to clipboard"


def resolve_copy_destination(record: FileRecord, cwd: Path) -> Path:
    """Return where Copy To Directory writes ``record`` under ``cwd``.

    Command files keep their ``.claude/commands/...`` suffix; everything else
    lands directly in ``cwd`` under its base name.
    """
    source = Path(record.path)
    if record.file_type is not FileType.SLASH_COMMAND:
        return cwd / source.name
    parts = source.parts
    for idx in range(len(parts) - 1):
        if (parts[idx], parts[idx + 1]) == COMMANDS_MARKER:
            return cwd.joinpath(*parts[idx:])
    return cwd.joinpath(*COMMANDS_MARKER, source.name)


def perform_copy(source: Path, destination: Path) -> str:
    """Create parent directories and copy bytes; not transactional."""
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise ActionFailure(f"Failed to copy file: {_os_reason(exc)}") from exc
    logger.info("copied %s -> %s", source, destination)
    return f"✅ Copied to {destination}"


def copy_to_directory(record: FileRecord, context: ActionContext) -> ActionResult:
    source = Path(record.path)
    destination = resolve_copy_destination(record, context.get_cwd())
    try:
        os.stat(destination)
    except FileNotFoundError:
        return perform_copy(source, destination)
    except OSError as exc:
        raise DestinationCheckFailure(
            f"Cannot check destination {destination}: {_os_reason(exc)}"
        ) from exc
    return ConfirmationRequest(
        message=f"⚠️  {destination.name} already exists. Overwrite?",
        proceed=partial(perform_copy, source, destination),
    )


def edit_file(record: FileRecord, context: ActionContext) -> str:
    config = resolve_editor_config(context.environ)
    context.run_editor(Path(record.path), config)
    return "✅ Opened in editor"


def open_file(record: FileRecord, context: ActionContext) -> str:
    try:
        context.open_path(record.path)
    except Exception as exc:
        raise OpenerFailure(f"Failed to open file: {exc}") from exc
    return "✅ File opened"


def build_menu_actions(record: FileRecord, context: ActionContext | None = None) -> list[MenuAction]:
    """Return the fixed, ordered action list for ``record``."""
    ctx = context or ActionContext()
    return [
        MenuAction(
            key="c",
            label="Copy Content",
            description="Copy file content to clipboard",
            action=partial(copy_content, record, ctx),
        ),
        MenuAction(
            key="p",
            label="Copy Path (Absolute)",
            description="Copy absolute file path to clipboard",
            action=partial(copy_absolute_path, record, ctx),
        ),
        MenuAction(
            key="r",
            label="Copy Path (Relative)",
            description="Copy relative file path to clipboard",
            action=partial(copy_relative_path, record, ctx),
        ),
        MenuAction(
            key="d",
            label="Copy To Directory",
            description="Copy file to the current directory",
            action=partial(copy_to_directory, record, ctx),
        ),
        MenuAction(
            key="e",
            label="Edit File",
            description="Open file in $EDITOR",
            action=partial(edit_file, record, ctx),
            foreground=True,
        ),
        MenuAction(
            key="o",
            label="Open File",
            description="Open file with default application",
            action=partial(open_file, record, ctx),
        ),
    ]
