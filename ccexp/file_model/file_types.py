"""Per-type display lookups: group order, labels, icons, and theme colors.

Every table must cover every ``FileType``; a missing entry fails at import.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..ui_theme import DEFAULT_THEME, UITheme
from .types import FileType

GROUP_ORDER: tuple[FileType, ...] = (
    FileType.PROJECT_CONFIG,
    FileType.LOCAL_PROJECT_CONFIG,
    FileType.SLASH_COMMAND,
    FileType.GLOBAL_CONFIG,
    FileType.SETTINGS,
    FileType.LOCAL_SETTINGS,
    FileType.OTHER,
)

_GROUP_LABELS: dict[FileType, str] = {
    FileType.PROJECT_CONFIG: "PROJECT",
    FileType.LOCAL_PROJECT_CONFIG: "LOCAL",
    FileType.SLASH_COMMAND: "COMMAND",
    FileType.GLOBAL_CONFIG: "GLOBAL",
    FileType.SETTINGS: "SETTINGS",
    FileType.LOCAL_SETTINGS: "LOCAL SETTINGS",
    FileType.OTHER: "OTHER",
}

_ICONS: dict[FileType, str] = {
    FileType.PROJECT_CONFIG: "📝",
    FileType.LOCAL_PROJECT_CONFIG: "🔒",
    FileType.SLASH_COMMAND: "⚡",
    FileType.GLOBAL_CONFIG: "🌐",
    FileType.SETTINGS: "⚙️",
    FileType.LOCAL_SETTINGS: "🔧",
    FileType.OTHER: "📄",
}

# Values name ``UITheme`` attributes.
_THEME_COLOR_FIELDS: dict[FileType, str] = {
    FileType.PROJECT_CONFIG: "type_project",
    FileType.LOCAL_PROJECT_CONFIG: "type_local",
    FileType.SLASH_COMMAND: "type_command",
    FileType.GLOBAL_CONFIG: "type_global",
    FileType.SETTINGS: "type_settings",
    FileType.LOCAL_SETTINGS: "type_local_settings",
    FileType.OTHER: "type_other",
}


def _require_exhaustive(table: Mapping[FileType, object] | tuple[FileType, ...], name: str) -> None:
    missing = [file_type.name for file_type in FileType if file_type not in table]
    if missing:
        raise RuntimeError(f"{name} is missing entries for: {', '.join(missing)}")


_require_exhaustive(GROUP_ORDER, "GROUP_ORDER")
_require_exhaustive(_GROUP_LABELS, "_GROUP_LABELS")
_require_exhaustive(_ICONS, "_ICONS")
_require_exhaustive(_THEME_COLOR_FIELDS, "_THEME_COLOR_FIELDS")
for _field in _THEME_COLOR_FIELDS.values():
    if not hasattr(DEFAULT_THEME, _field):
        raise RuntimeError(f"UITheme has no color field {_field!r}")


def group_rank(file_type: FileType) -> int:
    """Return the display position of ``file_type`` groups."""
    return GROUP_ORDER.index(file_type)


def group_label(file_type: FileType) -> str:
    return _GROUP_LABELS[file_type]


def file_icon(file_type: FileType) -> str:
    return _ICONS[file_type]


def type_color(file_type: FileType, theme: UITheme | None = None) -> str:
    """Return the ANSI color used for ``file_type`` headers and badges."""
    active_theme = theme or DEFAULT_THEME
    return getattr(active_theme, _THEME_COLOR_FIELDS[file_type])
