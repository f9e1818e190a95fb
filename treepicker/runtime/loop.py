"""Main interactive event loop for the terminal UI.

Each iteration syncs the terminal size, keeps both cursors inside their
viewports, redraws when dirty, and dispatches one key. Commands run one at a
time on this single thread.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable

from ..ui_theme import DEFAULT_THEME, UITheme
from .key_handlers import KeyActions, handle_key
from .keys import read_key
from .layout import clamp_left_width, scroll_start
from .render import FrameSize, render_frame
from .state import AppState
from .terminal import TerminalController

IDLE_TIMEOUT_MS = 250


def sync_viewports(state: AppState, size: FrameSize) -> None:
    """Clamp pane widths and scroll offsets to the current terminal size."""
    prev = (state.width, state.usable, state.left_width, state.tree_start, state.list_start)
    state.width = size.width
    state.usable = size.content_rows
    state.left_width = clamp_left_width(size.width, state.left_width)

    nav = state.nav
    visible = nav.tree.visible_paths()
    state.tree_start = scroll_start(
        visible.index(nav.cursor),
        state.tree_start,
        state.usable,
        len(visible),
    )
    state.list_start = scroll_start(
        nav.list_index,
        state.list_start,
        state.usable,
        len(nav.selection),
    )
    if prev != (state.width, state.usable, state.left_width, state.tree_start, state.list_start):
        state.dirty = True


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    actions: KeyActions,
    theme: UITheme = DEFAULT_THEME,
    read_key_fn: Callable[..., str] = read_key,
) -> None:
    """Run the interactive loop until a quit key is pressed."""
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = FrameSize(width=term.columns, height=term.lines)
            sync_viewports(state, size)
            if state.dirty:
                terminal.write(render_frame(state, size, theme))
                state.dirty = False

            key = read_key_fn(stdin_fd, timeout_ms=IDLE_TIMEOUT_MS)
            if not key:
                continue
            if handle_key(key, state, actions):
                return
