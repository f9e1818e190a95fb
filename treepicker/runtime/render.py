"""Frame composition for the tree | selection split view.

``render_frame`` is side-effect free and returns the full ANSI frame; the loop
writes it through the terminal controller.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from pathlib import Path

from ..ansi import clip_ansi_line, display_width, fit_ansi_line
from ..export.serialize import relative_label
from ..file_tree_model import LazyTree
from ..navigation import Pane
from ..selection import SelectionSet
from ..ui_theme import DEFAULT_THEME, UITheme
from .state import AppState, Modal

HELP_TREE = "h/j/k/l move  Enter/l open  Space select  r reload  ] list  q quit"
HELP_SELECTION = "j/k move  d remove  e export  [ tree  Esc tree  q quit"
HELP_MODAL = "Left/Right choose  Enter confirm  Esc cancel"


@dataclass(frozen=True)
class FrameSize:
    width: int
    height: int

    @property
    def content_rows(self) -> int:
        # One title row on top, one help bar at the bottom.
        return max(1, self.height - 2)


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def format_tree_row(
    tree: LazyTree,
    path: Path,
    selection: SelectionSet,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Render one tree row: indent, expansion marker, name, selection mark."""
    node = tree.node(path)
    reset = theme.reset
    if path == tree.root:
        marker = "▾ " if node.is_expanded else "▸ "
        return f"{theme.tree_marker}{marker}{reset}{theme.tree_root}{path}{reset}"

    depth = tree.depth_of(path)
    indent = "  " * depth
    if node.is_dir:
        marker = "▾ " if node.is_expanded else "▸ "
        row = f"{indent}{theme.tree_marker}{marker}{reset}{theme.tree_dir}{path.name}/{reset}"
        if node.scan_error is not None and node.is_expanded:
            row += f" {theme.tree_error}[unreadable]{reset}"
        return row

    mark = f"{theme.tree_selected_mark}* {reset}" if path in selection else "  "
    return f"{indent}{mark}{theme.tree_file}{path.name}{reset}"


def _cursor_style(text: str, focused: bool, theme: UITheme) -> str:
    """Reverse video in the focused pane, a lighter mark in the other one."""
    if focused:
        return selected_with_ansi(text)
    return f"{theme.list_cursor_inactive}{text}{theme.reset}"


def _pane_title(label: str, width: int, active: bool, theme: UITheme) -> str:
    style = theme.pane_title_active if active else theme.pane_title_inactive
    return f"{style}{fit_ansi_line(label, width)}{theme.reset}"


def _modal_lines(modal: Modal, width: int, theme: UITheme) -> list[str]:
    inner = max(10, min(width - 6, 64))
    text_lines: list[str] = []
    for paragraph in modal.text.split("\n"):
        text_lines.extend(textwrap.wrap(paragraph, inner) or [""])

    buttons: list[str] = []
    for idx, choice in enumerate(modal.choices):
        label = f"[ {choice.label} ]"
        if idx == modal.selected:
            label = f"{theme.reverse}{label}{theme.reset}"
        else:
            label = f"{theme.modal_choice}{label}{theme.reset}"
        buttons.append(label)
    button_row = "  ".join(buttons)
    button_pad = max(0, (inner - display_width(button_row)) // 2)

    border = theme.modal_border
    reset = theme.reset
    out = [f"{border}┌{'─' * (inner + 2)}┐{reset}"]
    for line in text_lines:
        out.append(f"{border}│{reset} {theme.modal_text}{fit_ansi_line(line, inner)}{reset} {border}│{reset}")
    out.append(f"{border}│{reset} {' ' * inner} {border}│{reset}")
    out.append(
        f"{border}│{reset} {fit_ansi_line(' ' * button_pad + button_row, inner)} {border}│{reset}"
    )
    out.append(f"{border}└{'─' * (inner + 2)}┘{reset}")
    return out


def _overlay_modal(rows: list[str], modal: Modal, width: int, theme: UITheme) -> list[str]:
    box = _modal_lines(modal, width, theme)
    box_width = display_width(box[0])
    left_pad = max(0, (width - box_width) // 2)
    top = max(0, (len(rows) - len(box)) // 2)
    out = list(rows)
    for offset, line in enumerate(box):
        row = top + offset
        if row >= len(out):
            break
        out[row] = fit_ansi_line(" " * left_pad + line, width)
    return out


def render_frame(state: AppState, size: FrameSize, theme: UITheme = DEFAULT_THEME) -> str:
    """Compose the full screen: pane titles, tree and list rows, help bar, modal."""
    nav = state.nav
    width = size.width
    left_width = max(1, min(state.left_width, width - 2))
    right_width = max(1, width - left_width - 1)
    content_rows = size.content_rows
    divider = f"{theme.divider}│{theme.reset}"

    visible = nav.tree.visible_paths()
    cursor_idx = visible.index(nav.cursor)
    paths = nav.selection.ordered_paths()
    tree_focused = nav.focus is Pane.TREE

    rows: list[str] = [
        _pane_title(" Tree ", left_width, tree_focused, theme)
        + divider
        + _pane_title(f" Selected files ({len(paths)}) ", right_width, not tree_focused, theme)
    ]
    for row in range(content_rows):
        tree_idx = state.tree_start + row
        if tree_idx < len(visible):
            tree_text = clip_ansi_line(
                format_tree_row(nav.tree, visible[tree_idx], nav.selection, theme),
                left_width,
            )
            if tree_idx == cursor_idx:
                tree_text = _cursor_style(tree_text, tree_focused, theme)
        else:
            tree_text = ""

        list_idx = state.list_start + row
        if list_idx < len(paths):
            list_text = clip_ansi_line(" " + relative_label(paths[list_idx], state.start_dir), right_width)
            if list_idx == nav.list_index:
                list_text = _cursor_style(list_text, not tree_focused, theme)
        else:
            list_text = ""

        rows.append(fit_ansi_line(tree_text, left_width) + divider + fit_ansi_line(list_text, right_width))

    if state.modal is not None:
        rows = _overlay_modal(rows, state.modal, width, theme)
        help_text = HELP_MODAL
    else:
        help_text = HELP_TREE if tree_focused else HELP_SELECTION
    rows.append(f"{theme.help_bar}{fit_ansi_line(' ' + help_text, width - 1)}{theme.reset}")

    return "\033[H\033[J" + "\r\n".join(rows)


__all__ = [
    "FrameSize",
    "HELP_TREE",
    "HELP_SELECTION",
    "HELP_MODAL",
    "selected_with_ansi",
    "format_tree_row",
    "render_frame",
]
