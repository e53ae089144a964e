"""Frame rendering for the file browser.

Everything here is presentation-only and side-effect free: functions take
read-only snapshots and return ANSI-styled rows. The runtime writes frames.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .actions import ActionMenuState, MenuAction, MenuPhase
from .ansi import clip_ansi_line, display_width, fit_ansi_line
from .file_model import FileRecord, FileType, file_icon, group_label, type_color
from .navigation import VisibleNode
from .ui_theme import DEFAULT_THEME, UITheme

APP_TITLE = "ccexp"
APP_SUBTITLE = "Interactive File Browser"
LIST_FOOTER = "↑↓: Navigate | Enter/Space: Select | Esc: Clear/Exit | Backspace: Remove char | Ctrl+U: Clear search | Ctrl+R: Rescan"
MENU_FOOTER = "↑↓: Navigate | Enter: Execute | [Key]: Direct action | Esc: Close"
CONFIRM_PROMPT = "Press Y to confirm or n to cancel: "
SEARCH_PLACEHOLDER = "Type to search..."
EXECUTING_TEXT = "Executing..."
LIST_PANE_PERCENT = 40
LIST_HEADER_ROWS = 3


@dataclass(frozen=True)
class MenuView:
    """Snapshot of an open action menu."""

    record: FileRecord
    actions: Sequence[MenuAction]
    state: ActionMenuState


@dataclass(frozen=True)
class RenderContext:
    """Everything needed to draw one main-screen frame."""

    nodes: Sequence[VisibleNode]
    selection: int
    list_start: int
    filter_text: str
    visible_file_count: int
    total_files: int
    width: int
    height: int
    preview_header: Sequence[str] = ()
    preview_lines: Sequence[str] = ()
    menu: MenuView | None = None
    status_message: str = ""
    theme: UITheme = field(default=DEFAULT_THEME)


def compute_list_width(total_width: int) -> int:
    """Choose list-pane width from total terminal width."""
    if total_width <= 40:
        return max(1, total_width // 2)
    return max(20, (total_width * LIST_PANE_PERCENT) // 100)


def list_view_rows(height: int) -> int:
    """Rows available for list nodes below the list header."""
    return max(1, height - 3 - LIST_HEADER_ROWS)


def scroll_start_for(selection: int, start: int, rows: int, total: int) -> int:
    """Keep ``selection`` inside a ``rows``-tall window starting near ``start``."""
    if selection < start:
        start = selection
    elif selection >= start + rows:
        start = selection - rows + 1
    return max(0, min(start, max(0, total - rows)))


def display_name(record: FileRecord) -> str:
    """Short label for a file row."""
    path = Path(record.path)
    name = path.name
    if record.file_type is FileType.GLOBAL_CONFIG:
        return f"~/.claude/{name}"
    if record.file_type is FileType.SLASH_COMMAND:
        return name[:-3] if name.endswith(".md") else name
    if record.file_type in {FileType.SETTINGS, FileType.LOCAL_SETTINGS}:
        parts = path.parts
        if ".claude" in parts:
            claude_idx = len(parts) - 1 - parts[::-1].index(".claude")
            if claude_idx > 0 and parts[claude_idx - 1] not in {"", "/"}:
                return f"{parts[claude_idx - 1]}/.claude/{name}"
    parent = path.parent.name
    return f"{parent}/{name}" if parent else name


def format_group_row(node: VisibleNode, selected: bool, theme: UITheme = DEFAULT_THEME) -> str:
    marker = "▼" if node.is_expanded else "▶"
    text = f"{marker} {group_label(node.file_type)} ({node.count})"
    if selected:
        return f"{theme.selected}► {text}{theme.reset}"
    return f"  {type_color(node.file_type, theme)}{text}{theme.reset}"


def format_file_row(record: FileRecord, selected: bool, theme: UITheme = DEFAULT_THEME) -> str:
    prefix = "► " if selected else "  "
    text = f"{prefix}{file_icon(record.file_type)} {display_name(record)}"
    if selected:
        return f"    {theme.selected}{text}{theme.reset}"
    return f"    {text}"


def format_node(node: VisibleNode, selected: bool, theme: UITheme = DEFAULT_THEME) -> str:
    if node.record is None:
        return format_group_row(node, selected, theme)
    return format_file_row(node.record, selected, theme)


def build_list_rows(context: RenderContext, rows: int) -> list[str]:
    theme = context.theme
    count = context.visible_file_count if context.filter_text else context.total_files
    out = [f"{theme.title}Claude Files ({count}){theme.reset}"]
    if context.filter_text:
        out.append(f"{theme.dim}Search: {context.filter_text}{theme.reset}")
    else:
        out.append(f"{theme.dim}{SEARCH_PLACEHOLDER}{theme.reset}")
    out.append("")
    if not context.nodes and context.filter_text:
        out.append(f"{theme.dim}No files match{theme.reset}")
    end = min(len(context.nodes), context.list_start + rows)
    for idx in range(context.list_start, end):
        out.append(format_node(context.nodes[idx], idx == context.selection, theme))
    return out


def menu_header_path(path: str) -> str:
    """Last two path segments, e.g. ``commands/deploy.md``."""
    parts = path.replace("\\", "/").split("/")
    return "/".join(parts[-2:]) if len(parts) > 1 else path


def build_menu_rows(menu: MenuView, theme: UITheme = DEFAULT_THEME) -> list[str]:
    state = menu.state
    out = [
        f"{theme.menu_title}📋 Actions{theme.reset}",
        f"{theme.dim}{menu_header_path(menu.record.path)}{theme.reset}",
        "",
    ]
    if state.phase is MenuPhase.EXECUTING:
        out.append(EXECUTING_TEXT)
    else:
        out.append(state.message)
    out.append("")
    if state.phase is MenuPhase.AWAITING_CONFIRMATION:
        out.append(f"{theme.warning}{state.confirm_message}{theme.reset}")
        out.append("")
        out.append(CONFIRM_PROMPT)
    else:
        for idx, action in enumerate(menu.actions):
            label = f"[{action.key.upper()}] {action.label}"
            if idx == state.selected_index:
                out.append(f"{theme.selected}► {label}{theme.reset}")
            else:
                out.append(f"  {label}")
    return out


def build_preview_header(record: FileRecord, line_count: int, char_count: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    return [
        f"{theme.title}{Path(record.path).name}{theme.reset}",
        f"{theme.dim}{record.path}{theme.reset}",
        f"{type_color(record.file_type, theme)}Type: {record.file_type.value} | Lines: {line_count} | Size: {char_count} chars{theme.reset}",
        f"{theme.divider}{'─' * 40}{theme.reset}",
    ]


def build_frame(context: RenderContext) -> list[str]:
    """Compose the main screen as exactly ``context.height`` rows."""
    theme = context.theme
    width = max(1, context.width)
    height = max(3, context.height)
    body_rows = height - 3

    left_width = min(width, compute_list_width(width))
    right_width = max(0, width - left_width - 1)
    if context.menu is not None:
        left = build_menu_rows(context.menu, theme)
    else:
        left = build_list_rows(context, list_view_rows(height))
    right = [*context.preview_header, *context.preview_lines]

    rows = [fit_ansi_line(f"{theme.title}{APP_TITLE}{theme.reset}{theme.dim} | {APP_SUBTITLE}{theme.reset}", width, theme.reset)]
    divider = f"{theme.divider}│{theme.reset}"
    for row in range(body_rows):
        left_text = left[row] if row < len(left) else ""
        line = fit_ansi_line(left_text, left_width, theme.reset)
        if right_width > 0:
            right_text = right[row] if row < len(right) else ""
            line += divider + clip_ansi_line(right_text.rstrip("\r\n"), right_width)
            if "\x1b" in right_text:
                line += "\033[0m"
        rows.append(line)

    footer = MENU_FOOTER if context.menu is not None else LIST_FOOTER
    rows.append(fit_ansi_line(f"{theme.dim}{footer}{theme.reset}", width, theme.reset))
    rows.append(fit_ansi_line(context.status_message, width, theme.reset))
    return rows


def build_message_screen(lines: Sequence[str], width: int, height: int) -> list[str]:
    """Center ``lines`` vertically and horizontally."""
    height = max(1, height)
    top = max(0, (height - len(lines)) // 2)
    out = [""] * top
    for text in lines:
        clipped = clip_ansi_line(text, width)
        pad = max(0, (width - display_width(clipped)) // 2)
        out.append(" " * pad + clipped)
    out.extend([""] * max(0, height - len(out)))
    return out[:height]


def build_loading_screen(width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    return build_message_screen([f"{theme.title}Scanning for Claude files...{theme.reset}"], width, height)


def build_empty_screen(width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    return build_message_screen(
        [
            f"{theme.warning}No Claude files found{theme.reset}",
            f"{theme.dim}Create a CLAUDE.md file to get started{theme.reset}",
            f"{theme.dim}Press q or Ctrl+C to exit{theme.reset}",
        ],
        width,
        height,
    )


def build_error_screen(message: str, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    return build_message_screen(
        [
            f"{theme.error}Error: {message}{theme.reset}",
            f"{theme.dim}Press q or Ctrl+C to exit{theme.reset}",
        ],
        width,
        height,
    )


def frame_to_text(rows: Sequence[str]) -> str:
    """Join rows into one terminal write that repaints from the top-left."""
    return "\033[H\033[J" + "\r\n".join(rows)
