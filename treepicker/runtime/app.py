"""Composition root for the interactive picker.

Builds the tree, the selection, the navigation controller, and the export
pipeline, then hands them to the main loop.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path

from ..config import load_left_pane_percent, save_left_pane_percent
from ..export import ExportCommands, ExportMode, ExportPipeline, ExportResult
from ..file_tree_model import LazyTree
from ..navigation import NavigationController
from ..selection import SelectionSet
from ..ui_theme import resolve_theme
from .key_handlers import KeyActions
from .layout import clamp_left_width, compute_left_width
from .loop import run_main_loop
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_state(start_dir: Path, show_hidden: bool = True, columns: int = 80) -> AppState:
    """Create the initial state with the start directory loaded and expanded."""
    tree = LazyTree(start_dir, show_hidden=show_hidden)
    tree.expand(start_dir)
    nav = NavigationController(tree, SelectionSet())
    return AppState(
        start_dir=start_dir,
        nav=nav,
        left_width=compute_left_width(columns, load_left_pane_percent()),
        width=columns,
    )


def run_picker(
    start_dir: Path,
    commands: ExportCommands,
    show_hidden: bool = True,
    no_color: bool = False,
) -> None:
    """Run the picker on ``start_dir`` until the user quits."""
    if not os.isatty(sys.stdin.fileno()) or not os.isatty(sys.stdout.fileno()):
        raise SystemExit("treepicker needs an interactive terminal.")

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    state = build_state(start_dir, show_hidden, shutil.get_terminal_size((80, 24)).columns)
    pipeline = ExportPipeline(
        state.nav.selection,
        start_dir,
        commands,
        suspend_tui=terminal.suspended,
    )

    def export(mode: ExportMode) -> ExportResult:
        result = pipeline.export(mode)
        state.dirty = True
        return result

    def resize_tree(delta: int) -> None:
        previous = state.left_width
        state.left_width = clamp_left_width(state.width, state.left_width + delta)
        if state.left_width != previous:
            save_left_pane_percent(state.width, state.left_width)
            state.dirty = True

    logger.info("starting treepicker in %s", start_dir)
    run_main_loop(
        state,
        terminal,
        stdin_fd,
        KeyActions(export=export, resize_tree=resize_tree),
        theme=resolve_theme(no_color),
    )
