"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (list/menu/chrome). Syntax highlighting style
for previews remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reset: str
    selected: str
    title: str
    dim: str
    error: str
    warning: str
    type_project: str
    type_local: str
    type_command: str
    type_global: str
    type_settings: str
    type_local_settings: str
    type_other: str
    menu_title: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    selected="\033[44;97m",
    title="\033[1;36m",
    dim="\033[2;38;5;250m",
    error="\033[1;31m",
    warning="\033[1;33m",
    type_project="\033[1;34m",
    type_local="\033[1;33m",
    type_command="\033[1;32m",
    type_global="\033[1;35m",
    type_settings="\033[1;36m",
    type_local_settings="\033[1;93m",
    type_other="\033[1;90m",
    menu_title="\033[1;33m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reset="\033[0m",
    selected="\033[48;5;24;97m",
    title="\033[1;38;5;45m",
    dim="\033[2;38;5;110m",
    error="\033[1;38;5;203m",
    warning="\033[1;38;5;215m",
    type_project="\033[1;38;5;39m",
    type_local="\033[1;38;5;215m",
    type_command="\033[1;38;5;84m",
    type_global="\033[1;38;5;141m",
    type_settings="\033[1;38;5;45m",
    type_local_settings="\033[1;38;5;229m",
    type_other="\033[1;38;5;244m",
    menu_title="\033[1;38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="",
    selected="",
    title="",
    dim="",
    error="",
    warning="",
    type_project="",
    type_local="",
    type_command="",
    type_global="",
    type_settings="",
    type_local_settings="",
    type_other="",
    menu_title="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
