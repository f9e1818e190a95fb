"""Key dispatch for the tree pane, the selection pane, and modals."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import EmptySelectionError
from ..export import ExportMode, ExportResult
from ..navigation import NavigationController, Pane
from .state import AppState, Modal, export_prompt, notice

logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "CTRL_C"}
RESIZE_STEP = 2


@dataclass(frozen=True)
class KeyActions:
    """Operations the key handlers need from the composition root."""

    export: Callable[[ExportMode], ExportResult]
    resize_tree: Callable[[int], None]


def _handle_modal_key(key: str, state: AppState, modal: Modal, actions: KeyActions) -> None:
    if key in {"LEFT", "h"}:
        modal.selected = (modal.selected - 1) % len(modal.choices)
        return
    if key in {"RIGHT", "l", "TAB"}:
        modal.selected = (modal.selected + 1) % len(modal.choices)
        return

    if key == "ENTER":
        choice = modal.choices[modal.selected]
    else:
        choice = next((item for item in modal.choices if key in item.hotkeys), None)
        if choice is None:
            return

    state.modal = None
    if choice.value is None or choice.value is ExportMode.CANCEL:
        return
    result = actions.export(choice.value)
    state.modal = notice(result.message)


def _handle_tree_key(key: str, nav: NavigationController, actions: KeyActions) -> None:
    if key in {"j", "DOWN"}:
        nav.move_down()
    elif key in {"k", "UP"}:
        nav.move_up()
    elif key in {"h", "LEFT"}:
        nav.collapse_or_up()
    elif key == "l":
        nav.expand_or_into()
    elif key == "RIGHT":
        nav.expand()
    elif key == "ENTER":
        nav.activate()
    elif key == " ":
        nav.toggle_select()
    elif key == "r":
        nav.reload()
    elif key == "SHIFT_LEFT":
        actions.resize_tree(-RESIZE_STEP)
    elif key == "SHIFT_RIGHT":
        actions.resize_tree(RESIZE_STEP)


def _handle_selection_key(key: str, state: AppState, nav: NavigationController) -> None:
    if key in {"j", "DOWN"}:
        nav.move_list(1)
    elif key in {"k", "UP"}:
        nav.move_list(-1)
    elif key == "d":
        nav.remove_focused()
    elif key == "ESC":
        nav.switch_focus(Pane.TREE)
    elif key == "e":
        if not nav.selection:
            logger.info("export requested with empty selection")
            state.modal = notice(str(EmptySelectionError()))
        else:
            state.modal = export_prompt()


def handle_key(key: str, state: AppState, actions: KeyActions) -> bool:
    """Handle one key and return ``True`` when the app should quit."""
    if key == "CTRL_C":
        return True

    state.dirty = True
    modal = state.modal
    if modal is not None:
        _handle_modal_key(key, state, modal, actions)
        return False

    if key in QUIT_KEYS:
        return True

    nav = state.nav
    if key == "[":
        nav.switch_focus(Pane.TREE)
    elif key == "]":
        nav.switch_focus(Pane.SELECTION)
    elif key == "TAB":
        nav.switch_focus(Pane.SELECTION if nav.focus is Pane.TREE else Pane.TREE)
    elif nav.focus is Pane.TREE:
        _handle_tree_key(key, nav, actions)
    else:
        _handle_selection_key(key, state, nav)
    return False


__all__ = [
    "KeyActions",
    "handle_key",
]
