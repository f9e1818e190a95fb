"""UI palettes for the tree, the selection list, and the chrome."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    divider: str
    pane_title_active: str
    pane_title_inactive: str
    tree_root: str
    tree_marker: str
    tree_dir: str
    tree_file: str
    tree_selected_mark: str
    tree_error: str
    list_cursor_inactive: str
    help_bar: str
    modal_border: str
    modal_text: str
    modal_choice: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[34m",
    pane_title_active="\033[1;44;97m",
    pane_title_inactive="\033[2;38;5;250m",
    tree_root="\033[1;33m",
    tree_marker="\033[38;5;44m",
    tree_dir="\033[32m",
    tree_file="\033[38;5;252m",
    tree_selected_mark="\033[1;38;5;81m",
    tree_error="\033[2;31m",
    list_cursor_inactive="\033[4m",
    help_bar="\033[44;97m",
    modal_border="\033[34m",
    modal_text="\033[1m",
    modal_choice="\033[38;5;229m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    reverse="\033[7m",
    divider="",
    pane_title_active="\033[7m",
    pane_title_inactive="",
    tree_root="",
    tree_marker="",
    tree_dir="",
    tree_file="",
    tree_selected_mark="",
    tree_error="",
    list_cursor_inactive="",
    help_bar="\033[7m",
    modal_border="",
    modal_text="",
    modal_choice="",
)


def resolve_theme(no_color: bool = False) -> UITheme:
    """Return the palette for the requested color mode."""
    return PLAIN_THEME if no_color else DEFAULT_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "resolve_theme",
]
