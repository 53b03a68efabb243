"""UI theme definitions and selection helpers.

Themes are plain ANSI SGR palettes consumed by the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    header: str
    header_count: str
    entry_dir: str
    entry_file: str
    entry_symlink: str
    cursor_row: str
    selected_row: str
    selected_marker: str
    status: str
    search_prompt: str
    search_query: str
    empty_hint: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;38;5;81m",
    header_count="\033[38;5;229m",
    entry_dir="\033[1;34m",
    entry_file="\033[38;5;252m",
    entry_symlink="\033[36m",
    cursor_row="\033[30;44m",
    selected_row="\033[1;33m",
    selected_marker="\033[1;33m",
    status="\033[2;38;5;250m",
    search_prompt="\033[1;38;5;81m",
    search_query="\033[38;5;229m",
    empty_hint="\033[2m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    header_count="\033[38;5;153m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    entry_symlink="\033[38;5;117m",
    cursor_row="\033[30;48;5;39m",
    selected_row="\033[1;38;5;215m",
    selected_marker="\033[1;38;5;215m",
    status="\033[2;38;5;110m",
    search_prompt="\033[1;38;5;45m",
    search_query="\033[38;5;153m",
    empty_hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    header="",
    header_count="",
    entry_dir="",
    entry_file="",
    entry_symlink="",
    cursor_row="\033[7m",
    selected_row="",
    selected_marker="",
    status="",
    search_prompt="",
    search_query="",
    empty_hint="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> list[str]:
    return sorted(_THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the named theme; unknown names fall back to the default."""
    if no_color:
        return PLAIN_THEME
    if name is None:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
]
