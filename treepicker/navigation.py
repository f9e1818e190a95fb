"""Cursor state machine over the lazy tree and the selection list.

The controller owns only the tree cursor, the selection-list cursor, and the
pane focus. Every command returns ``True`` when something visible changed so
the runtime knows to redraw.
"""

from __future__ import annotations

import enum
from pathlib import Path

from .file_tree_model import LazyTree
from .selection import SelectionSet


class Pane(enum.Enum):
    TREE = "tree"
    SELECTION = "selection"


class NavigationController:
    """Interpret navigation and selection commands."""

    def __init__(self, tree: LazyTree, selection: SelectionSet) -> None:
        self.tree = tree
        self.selection = selection
        self.cursor: Path = tree.root
        self.focus = Pane.TREE
        self.list_index = 0

    # Tree pane

    def move(self, delta: int) -> bool:
        """Move the cursor ``delta`` rows in display order, clamped at both ends."""
        visible = self.tree.visible_paths()
        idx = visible.index(self.cursor)
        target = max(0, min(len(visible) - 1, idx + delta))
        if target == idx:
            return False
        self.cursor = visible[target]
        return True

    def move_down(self) -> bool:
        return self.move(1)

    def move_up(self) -> bool:
        return self.move(-1)

    def move_to_parent(self) -> bool:
        parent = self.tree.parent_of(self.cursor)
        if parent is None:
            return False
        self.cursor = parent.path
        return True

    def collapse_or_up(self) -> bool:
        node = self.tree.node(self.cursor)
        if node.is_expanded:
            self.tree.collapse(self.cursor)
            return True
        return self.move_to_parent()

    def expand(self) -> bool:
        node = self.tree.node(self.cursor)
        if not node.is_dir or node.is_expanded:
            return False
        self.tree.expand(self.cursor)
        return True

    def expand_or_into(self) -> bool:
        node = self.tree.node(self.cursor)
        if not node.is_dir:
            return False
        if not node.is_expanded:
            self.tree.expand(self.cursor)
            return True
        child = self.tree.first_child(self.cursor)
        if child is None:
            return False
        self.cursor = child.path
        return True

    def toggle_select(self) -> bool:
        """Toggle the cursor file in the selection; directories are ignored."""
        node = self.tree.node(self.cursor)
        if node.is_dir:
            return False
        self.selection.toggle(self.cursor)
        self._clamp_list_index()
        return True

    def activate(self) -> bool:
        node = self.tree.node(self.cursor)
        if node.is_dir:
            self.tree.toggle(self.cursor)
            return True
        return self.toggle_select()

    def reload(self) -> bool:
        """Drop cached children of the cursor directory and scan it again."""
        node = self.tree.node(self.cursor)
        if not node.is_dir:
            return False
        self.tree.invalidate(self.cursor)
        self.tree.expand(self.cursor)
        return True

    # Focus and selection pane

    def switch_focus(self, pane: Pane) -> bool:
        if self.focus is pane:
            return False
        self.focus = pane
        return True

    def _clamp_list_index(self) -> None:
        count = len(self.selection)
        self.list_index = max(0, min(self.list_index, count - 1)) if count else 0

    def move_list(self, delta: int) -> bool:
        count = len(self.selection)
        if count == 0:
            return False
        target = max(0, min(count - 1, self.list_index + delta))
        if target == self.list_index:
            return False
        self.list_index = target
        return True

    def focused_list_path(self) -> Path | None:
        paths = self.selection.ordered_paths()
        if 0 <= self.list_index < len(paths):
            return paths[self.list_index]
        return None

    def remove_focused(self) -> bool:
        """Remove the focused selection-list entry, keeping the cursor in range."""
        path = self.focused_list_path()
        if path is None:
            return False
        self.selection.remove(path)
        self._clamp_list_index()
        return True


__all__ = [
    "Pane",
    "NavigationController",
]
