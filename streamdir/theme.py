"""Listing theme definitions and selection helpers.

Themes are ANSI palettes for the listing formatters. ``plain`` is not
selectable by name; it is what ``--no-color`` (or a non-tty stdout) resolves to.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ListingTheme:
    """Semantic ANSI palette used by displayers."""

    name: str
    reset: str
    header: str
    header_path: str
    date: str
    time: str
    attribute_set: str
    attribute_unset: str
    size: str
    dir_marker: str
    dir_name: str
    file_name: str
    executable_name: str
    hidden_name: str
    symlink_name: str
    stream: str
    error: str
    summary_label: str
    summary_value: str


DEFAULT_THEME = ListingTheme(
    name="default",
    reset="\033[0m",
    header="\033[38;5;250m",
    header_path="\033[1;38;5;81m",
    date="\033[38;5;109m",
    time="\033[38;5;110m",
    attribute_set="\033[38;5;229m",
    attribute_unset="\033[2;38;5;240m",
    size="\033[38;5;109m",
    dir_marker="\033[1;34m",
    dir_name="\033[1;34m",
    file_name="\033[38;5;252m",
    executable_name="\033[38;5;42m",
    hidden_name="\033[2;38;5;250m",
    symlink_name="\033[38;5;44m",
    stream="\033[2;38;5;110m",
    error="\033[1;38;5;203m",
    summary_label="\033[38;5;250m",
    summary_value="\033[1;38;5;81m",
)

OCEAN_THEME = ListingTheme(
    name="ocean",
    reset="\033[0m",
    header="\033[38;5;153m",
    header_path="\033[1;38;5;45m",
    date="\033[38;5;73m",
    time="\033[38;5;117m",
    attribute_set="\033[38;5;153m",
    attribute_unset="\033[2;38;5;24m",
    size="\033[38;5;73m",
    dir_marker="\033[1;38;5;45m",
    dir_name="\033[1;38;5;45m",
    file_name="\033[38;5;252m",
    executable_name="\033[38;5;84m",
    hidden_name="\033[2;38;5;110m",
    symlink_name="\033[38;5;39m",
    stream="\033[2;38;5;110m",
    error="\033[1;38;5;215m",
    summary_label="\033[38;5;153m",
    summary_value="\033[1;38;5;45m",
)

PLAIN_THEME = ListingTheme(
    name="plain",
    reset="",
    header="",
    header_path="",
    date="",
    time="",
    attribute_set="",
    attribute_unset="",
    size="",
    dir_marker="",
    dir_name="",
    file_name="",
    executable_name="",
    hidden_name="",
    symlink_name="",
    stream="",
    error="",
    summary_label="",
    summary_value="",
)

_THEMES: dict[str, ListingTheme] = {
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


def resolve_theme(name: str | None, *, no_color: bool = False) -> ListingTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def paint(theme: ListingTheme, style: str, text: str) -> str:
    """Wrap ``text`` in ``style`` when the theme carries colour."""
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


__all__ = [
    "ListingTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "paint",
]
